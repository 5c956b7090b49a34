"""CLI interface for rclone-autosync."""

import logging
from typing import Any, Optional

import click

from . import __version__
from .config import USAGE, SyncTarget, WatchSettings
from .exceptions import ArgumentError, AutosyncError, ConfigError
from .output import OutputFormatter
from .shutdown import ShutdownRequest
from .sync import SyncOperations, SyncScheduler, Supervisor
from .utils import DEFAULT_TOOL, format_duration, parse_duration

logger = logging.getLogger(__name__)


class DurationParamType(click.ParamType):
    """Click parameter type for Go-style durations ("5s", "1m30s")."""

    name = "duration"

    def convert(
        self, value: Any, param: Optional[click.Parameter], ctx: Optional[click.Context]
    ) -> float:
        if isinstance(value, (int, float)):
            return float(value)
        try:
            return parse_duration(value)
        except ValueError as e:
            self.fail(str(e), param, ctx)


DURATION = DurationParamType()


def configure_logging(verbose: bool, quiet: bool) -> None:
    """Configure logging for the watch loop.

    Args:
        verbose: Enable debug logging with logger names
        quiet: Only log warnings and errors
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("rclone_autosync").setLevel(logging.DEBUG)
    elif quiet:
        logging.basicConfig(level=logging.WARNING)
    else:
        # Plain timestamped lifecycle lines
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(message)s",
            datefmt="%Y/%m/%d %H:%M:%S",
        )


@click.command()
@click.argument("args", nargs=-1, metavar="REMOTE_SPEC LOCAL_PATH")
@click.option(
    "--rclone",
    "tool",
    envvar="RCLONE_AUTOSYNC_RCLONE",
    default=DEFAULT_TOOL,
    show_default=True,
    help="rclone command",
)
@click.option(
    "--error-retry-delay",
    type=DURATION,
    envvar="RCLONE_AUTOSYNC_ERROR_RETRY_DELAY",
    default="1m",
    show_default=True,
    help="Delay before retries on error",
)
@click.option(
    "--remote-check-period",
    type=DURATION,
    envvar="RCLONE_AUTOSYNC_REMOTE_CHECK_PERIOD",
    default="1m",
    show_default=True,
    help="Period for remote file system checks",
)
@click.option(
    "--local-check-period",
    type=DURATION,
    envvar="RCLONE_AUTOSYNC_LOCAL_CHECK_PERIOD",
    default="1s",
    show_default=True,
    help="Period for local file system checks",
)
@click.option(
    "--local-change-debounce-delay",
    type=DURATION,
    envvar="RCLONE_AUTOSYNC_DEBOUNCE_DELAY",
    default="5s",
    show_default=True,
    help="Debounce delay after change detection",
)
@click.option(
    "--isolate/--no-isolate",
    default=True,
    show_default=True,
    help="Run rclone in its own session so Ctrl-C doesn't cut a running sync short",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose/debug logging output",
)
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.version_option(version=__version__)
@click.pass_context
def main(
    ctx: Any,
    args: tuple[str, ...],
    tool: str,
    error_retry_delay: float,
    remote_check_period: float,
    local_check_period: float,
    local_change_debounce_delay: float,
    isolate: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Keep a local directory and an rclone remote in sync.

    Syncs down then up on start, syncs up once local changes have settled,
    syncs down periodically, and syncs up one last time on Ctrl-C.

    Examples:
        rclone-autosync gdrive:Documents ~/Documents
        rclone-autosync --local-change-debounce-delay 10s s3:bucket/notes ./notes
    """
    configure_logging(verbose, quiet)
    out = OutputFormatter(quiet=quiet)
    logger.info("Start")

    try:
        target = SyncTarget.from_args(args)
        settings = WatchSettings(
            tool=tool,
            error_retry_delay=error_retry_delay,
            remote_check_period=remote_check_period,
            local_check_period=local_check_period,
            local_change_debounce_delay=local_change_debounce_delay,
            isolate_subprocess=isolate,
        )
    except ArgumentError as e:
        out.error(str(e))
        out.usage(USAGE)
        ctx.exit(1)
    except ConfigError as e:
        out.error(str(e))
        ctx.exit(1)

    out.print_summary(
        "rclone-autosync",
        [
            ("Remote", target.remote_path),
            ("Local", target.local_path),
            ("Tool", settings.tool),
            ("Remote check", format_duration(settings.remote_check_period)),
            ("Local check", format_duration(settings.local_check_period)),
            ("Debounce", format_duration(settings.local_change_debounce_delay)),
            ("Retry delay", format_duration(settings.error_retry_delay)),
        ],
    )

    shutdown = ShutdownRequest()
    operations = SyncOperations(target, settings)
    scheduler = SyncScheduler(operations, target.local_root, settings, shutdown)
    supervisor = Supervisor(scheduler, settings, shutdown)

    try:
        with shutdown.install():
            supervisor.run_forever()
    except KeyboardInterrupt:
        out.warning("\nAborted by user")
        ctx.exit(130)  # Standard exit code for SIGINT
    except AutosyncError as e:
        out.error(str(e))
        ctx.exit(1)


if __name__ == "__main__":
    main()
