# Compatibility entrypoint; logging is configured by the command itself.
from cloudlogs.cli.main import main

if __name__ == "__main__":
    main()
