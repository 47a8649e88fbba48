# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Click-based CLI for pdfdocinfo.

Prints the document information of a PDF file: metadata fields merged
from the Info dictionary and the XMP packet, followed by a summary of
the document structure.
"""

# Standard Library
import logging
import sys
from pathlib import Path

# Third Party
import click
from colorama import Fore, Style, init

# Local
from . import __version__
from .document import open_document
from .encoding import CodecEncodingTable
from .exceptions import ConfigurationError, DocumentOpenError, PasswordError
from .report import iter_document_report
from .utils import get_text_encoding, setup_logging

EXIT_SUCCESS = 0
EXIT_OPEN_FAILED = 1
EXIT_FILE_NOT_FOUND = 2
EXIT_PASSWORD_ERROR = 3
EXIT_CONFIG_ERROR = 99

logger = logging.getLogger(__name__)


def print_error(msg: str) -> None:
    """Prints an error message in red.

    Args:
        msg: The error message to output.
    """
    click.echo(f"{Fore.RED}\u2717 Error:{Style.RESET_ALL} {msg}", err=True)


@click.command()
@click.argument("pdf_file", type=click.Path(dir_okay=False))
@click.option(
    "--raw-dates",
    is_flag=True,
    help="Print dates as stored, without parsing them",
)
@click.option(
    "--enc",
    "encoding_name",
    default=None,
    help="Output text encoding (default: $PDFDOCINFO_TEXT_ENCODING or utf-8)",
)
@click.option(
    "--opw",
    "--owner-password",
    "owner_password",
    default=None,
    help="Owner password for encrypted files",
)
@click.option(
    "--upw",
    "--user-password",
    "user_password",
    default=None,
    help="User password for encrypted files",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Only output errors",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Detailed output",
)
@click.version_option(version=__version__)
def main(
    pdf_file: str,
    raw_dates: bool,
    encoding_name: str | None,
    owner_password: str | None,
    user_password: str | None,
    quiet: bool,
    verbose: bool,
) -> None:
    """Prints the document information of PDF_FILE."""
    # Initialize colorama for Windows compatibility
    init()

    setup_logging(verbose=verbose, quiet=quiet)

    try:
        table = CodecEncodingTable(get_text_encoding(encoding_name))
        with open_document(
            Path(pdf_file),
            owner_password=owner_password,
            user_password=user_password,
        ) as pdf:
            for line in iter_document_report(pdf, table, raw_dates=raw_dates):
                click.echo(line, nl=False)
        exit_code = EXIT_SUCCESS

    except ConfigurationError as e:
        print_error(str(e))
        exit_code = EXIT_CONFIG_ERROR
    except FileNotFoundError as e:
        print_error(str(e))
        exit_code = EXIT_FILE_NOT_FOUND
    except PasswordError as e:
        print_error(str(e))
        exit_code = EXIT_PASSWORD_ERROR
    except DocumentOpenError as e:
        print_error(str(e))
        exit_code = EXIT_OPEN_FAILED
    except Exception as e:
        logger.exception("Unexpected error")
        print_error(f"Unexpected error: {e}")
        exit_code = EXIT_OPEN_FAILED

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
