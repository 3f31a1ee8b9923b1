# cloudlogs/__main__.py

# The CLI command configures logging itself once verbosity flags are parsed.
from cloudlogs.cli.main import main

if __name__ == "__main__":
    main()
