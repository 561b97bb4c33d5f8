"""Command-line entry point: fetch one URL with retries and print the body.

Examples:
  resilient-fetch example.com
  resilient-fetch https://api.example.com/items --max_retries 4 --verbose
  resilient-fetch example.com --timeout_ms 500 --retry_delay_ms 0 --output page.html

Exit codes:
  0 on success, 1 when the request fails, 2 on invalid options.
"""

import click

from config import settings as settings_module
from core.logging import log_operation, setup_logging
from errors import ConfigurationError
from net import RequestConfig

from .common import exit_with_message, write_output
from .handlers import handle_fetch


@click.command()
@click.argument("url")
@click.option(
    "--timeout_ms",
    type=int,
    default=lambda: settings_module.settings.timeout_ms,
    show_default="settings.timeout_ms",
    help="Base per-attempt deadline in milliseconds; doubles on every retry.",
)
@click.option(
    "--max_retries",
    type=int,
    default=lambda: settings_module.settings.max_retries,
    show_default="settings.max_retries",
    help="Number of retries after the first attempt.",
)
@click.option(
    "--retry_delay_ms",
    type=int,
    default=lambda: settings_module.settings.retry_delay_ms,
    show_default="settings.retry_delay_ms",
    help="Fixed wait between attempts in milliseconds.",
)
@click.option(
    "--verbose",
    is_flag=True,
    default=False,
    help="Log attempt durations, retries and total request time.",
)
@click.option(
    "--output",
    "output_path",
    default=None,
    help="Write the body to this file instead of stdout.",
)
def main(url, timeout_ms, max_retries, retry_delay_ms, verbose, output_path):
    """Fetch URL and print the decoded response body."""
    setup_logging()

    try:
        config = RequestConfig(
            timeout_ms=timeout_ms,
            max_retries=max_retries,
            retry_delay_ms=retry_delay_ms,
            verbose_logging=verbose or settings_module.settings.verbose_logging,
        )
    except ConfigurationError as error:
        raise click.BadParameter(str(error)) from error

    with log_operation("Fetch", level="DEBUG", url=url):
        result = handle_fetch(url, config)
    if not result["ok"]:
        exit_with_message(f"Error: {result['error'].message}", code=1)

    written = write_output(result["value"], output_path)
    if written is not None:
        click.echo(f"Saved response to {written}", err=True)


if __name__ == "__main__":
    main()
