import click

from cloudlogs.durations import parse_duration, parse_interval
from cloudlogs.errors import ArgumentParseError


def validate_since(ctx: click.Context, param, value):
    """
    Validate the ``--since`` duration and convert it to a timedelta.

    Parameters:
        ctx (click.Context): The Click context.
        param: The parameter definition.
        value: The duration string provided, such as "30m" or "7d".

    Returns:
        The parsed timedelta; otherwise, raises a click.BadParameter exception.
    """
    try:
        return parse_duration(value)
    except ArgumentParseError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param)


def validate_interval(ctx: click.Context, param, value):
    """
    Validate the ``--interval`` seconds between polls.

    Returns:
        The interval as an int of at least two seconds.
    """
    if isinstance(value, int):
        value = str(value)
    try:
        return parse_interval(value)
    except ArgumentParseError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param)
