import logging
from datetime import timedelta
from typing import Optional

import click

from cloudlogs import __version__ as about
from cloudlogs.application import workflows
from cloudlogs.cli.config import get_logger, setup_logging
from cloudlogs.cli.exit_codes import (
    EXTERNAL_FAILURE,
    INTERNAL_BUG,
    USER_ERROR,
    VALIDATION_ERROR,
)
from cloudlogs.cli.validators import validate_interval, validate_since
from cloudlogs.cloud.init import create_cloud_client
from cloudlogs.constants import (
    DEFAULT_INTERVAL,
    DEFAULT_SINCE,
    DEFAULT_TAIL,
    DEPLOYMENT_ENV_NAME_ENV,
)
from cloudlogs.errors import ConfigurationError, NotLoggedInError

# Get a logger for this module.
log = get_logger(__name__)

# Define an epilog message with examples.
EPILOG = f"""
Examples:

{click.style('• print the last 10 log lines of app "hello" from the past week', fg="green")}

    $ cloudlogs hello

{click.style('• follow the logs of app "hello", polling every 5 seconds', fg="green")}

    $ cloudlogs hello --follow --interval 5

{click.style('• print up to 100 lines logged in the last 30 minutes in environment "staging"', fg="green")}

    $ cloudlogs --app-name hello --tail 100 --since 30m --environment-name staging
"""


def _fail(ctx: click.Context, message: str, exit_code: int) -> None:
    """Print an annotated failure message to stderr and exit with ``exit_code``."""
    click.echo(click.style(workflows.annotate_failure(message), fg="red"), err=True)
    ctx.exit(exit_code)


@click.command(
    help=about.__description__,
    epilog=EPILOG,
)
@click.version_option(
    about.__version__,
    prog_name=about.__title__,
    message="%(prog)s, version %(version)s\nCheck {url} for more info".format(url=about.__url__),
)
@click.option(
    "--environment-name",
    "environment_name",
    metavar="<name>",
    default=None,
    help="Use the login saved under this environment name instead of the default one",
    envvar=DEPLOYMENT_ENV_NAME_ENV,
)
@click.option(
    "--app-name",
    "app_name",
    metavar="<app>",
    default=None,
    help="Name of the app to fetch logs for (alternative to APP)",
)
@click.option(
    "--follow",
    is_flag=True,
    default=False,
    show_default=True,
    help="Follow logs output",
)
@click.option(
    "--tail",
    type=click.IntRange(min=1),
    default=DEFAULT_TAIL,
    show_default=True,
    help="Number of lines to show from the end of the logs",
)
@click.option(
    "--interval",
    metavar="<seconds>",
    default=DEFAULT_INTERVAL,
    show_default=True,
    callback=validate_interval,
    help="Interval in seconds to refresh logs from the cloud (minimum 2)",
)
@click.option(
    "--since",
    metavar="<duration>",
    default=DEFAULT_SINCE,
    show_default=True,
    callback=validate_since,
    help=(
        "Only return logs newer than a relative duration: a number and a unit "
        "of 's', 'm', 'h' or 'd' (e.g. 30m)"
    ),
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging",
)
@click.argument("app", required=False)
@click.pass_context
def main(
        ctx: click.Context,
        environment_name: Optional[str],
        app_name: Optional[str],
        follow: bool,
        tail: int,
        interval: int,
        since: timedelta,
        verbose: bool,
        app: Optional[str],
):
    """
    Main entry point for the cloud logs CLI.

    This command validates inputs, builds an authenticated cloud client for the selected
    environment, resolves the app's logs channel and prints (or follows) its logs.

    Parameters:
        ctx (click.Context): Click context.
        environment_name (Optional[str]): Saved login to use; None for the default login.
        app_name (Optional[str]): App name given via --app-name.
        follow (bool): Flag to keep polling for new lines.
        tail (int): Number of lines requested by the first fetch.
        interval (int): Seconds between polls when following.
        since (timedelta): Initial lookback window.
        verbose (bool): Flag to enable debug logging.
        app (Optional[str]): App name given positionally.
    """
    setup_logging(level=logging.DEBUG if verbose else logging.INFO)

    flag_error = workflows.verify_app_name_flags(positional=app, option=app_name)
    if flag_error:
        raise click.UsageError(flag_error, ctx=ctx)

    request = workflows.build_logs_request(
        app_name=app or app_name,
        environment_name=environment_name,
        follow=follow,
        tail=tail,
        interval=interval,
        since=since,
    )
    log.debug("Logs request: %s", workflows.to_debug_map(request))

    try:
        with create_cloud_client(request.environment_name) as client:
            workflows.execute_logs(request, client=client)
    except (NotLoggedInError, workflows.ResolutionError) as exc:
        _fail(ctx, str(exc), USER_ERROR)
    except ConfigurationError as exc:
        _fail(ctx, str(exc), VALIDATION_ERROR)
    except workflows.ExternalDependencyError as exc:
        _fail(ctx, str(exc), EXTERNAL_FAILURE)
    except Exception as exc:
        log.exception("Failed to fetch logs")
        _fail(ctx, f"Failed to fetch logs: {exc}", INTERNAL_BUG)


if __name__ == "__main__":
    main(prog_name=about.__title__)
