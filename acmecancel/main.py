"""Command line entry point.

Usage::

    LE_KEY='{"D": ..., "X": ..., "Y": ...}' acmecancel [--staging] URL

Nothing is printed on success. Failures are reported as a single line on
stderr and a non-zero exit status.
"""
import argparse
import logging
import os
import sys
from typing import List
from typing import Mapping
from typing import Optional

from acmecancel import __version__
from acmecancel import client
from acmecancel import errors

logger = logging.getLogger(__name__)

CLI_FMT = 'acmecancel: %(message)s'
KEY_ENV_VAR = 'LE_KEY'


def prepare_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog='acmecancel',
        description='Deactivate a pending ACME authorization. The account key '
                    'is read from the {0} environment variable.'.format(KEY_ENV_VAR))
    parser.add_argument('url', help='authorization URL')
    parser.add_argument('--staging', action='store_true', default=False,
                        help='use acme staging server')
    parser.add_argument('-v', '--verbose', action='store_true', default=False,
                        help='log requests and responses')
    parser.add_argument('--version', action='version',
                        version='%(prog)s {0}'.format(__version__))
    return parser


def setup_logging(verbose: bool) -> None:
    """Send log records to stderr, prefixed with the program name."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(CLI_FMT))
    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def deactivate(key_json: str, url: str, directory: client.Directory) -> None:
    """Deactivate ``url``, treating a still-pending authorization as an error.

    :raises .KeyParseError: if the key cannot be decoded.
    :raises .ClientError: on any deactivation failure.

    """
    with client.AuthzDeactivator(key_json, directory) as deactivator:
        outcome = deactivator.deactivate(url)
    if outcome is client.Outcome.STILL_PENDING:
        raise errors.AuthorizationPending(url)


def main(cli_args: Optional[List[str]] = None,
         environ: Optional[Mapping[str, str]] = None) -> int:
    """Run acmecancel.

    :param cli_args: command line arguments, defaults to ``sys.argv[1:]``
    :param environ: environment, defaults to ``os.environ``

    :returns: process exit status
    :rtype: int

    """
    args = prepare_parser().parse_args(cli_args)
    environ = os.environ if environ is None else environ
    setup_logging(args.verbose)

    key_json = environ.get(KEY_ENV_VAR)
    if key_json is None:
        logger.critical('specify Let\'s Encrypt registration key with %s '
                        'environment variable', KEY_ENV_VAR)
        return 1

    directory = client.Directory.select(args.staging)
    logger.debug('Using directory %s', directory.url)
    try:
        deactivate(key_json, args.url, directory)
    except errors.KeyParseError as error:
        logger.critical('could not parse Let\'s Encrypt registration key: %s', error)
        return 1
    except errors.ClientError as error:
        logger.critical('could not disable authz: %s', error)
        return 1
    return 0
