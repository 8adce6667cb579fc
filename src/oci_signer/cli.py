"""
Command-line interface for the OCI HTTP signer
Prints the signed headers for a request without sending it
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import Optional

from . import __version__
from .config import DEFAULT_PROFILE, SignerConfig
from .exceptions import OCISignerError
from .signing import HttpMethod, Signer, CONTENT_TYPE_APPLICATION_JSON


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='oci-sign-headers',
        description='Print OCI API key signature headers for an HTTP request'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'OCI HTTP signer {__version__}'
    )

    parser.add_argument('url', help='Absolute request URL')
    parser.add_argument(
        '--method', '-X',
        type=str.upper,
        choices=[m.value for m in HttpMethod],
        default=HttpMethod.GET.value,
        help='HTTP method (default: GET)'
    )

    body_group = parser.add_mutually_exclusive_group()
    body_group.add_argument('--body', help='Request body')
    body_group.add_argument('--body-file', help='Read the request body from a file')

    parser.add_argument(
        '--content-type',
        default=CONTENT_TYPE_APPLICATION_JSON,
        help=f'Content type of the body (default: {CONTENT_TYPE_APPLICATION_JSON})'
    )
    parser.add_argument('--date', help='RFC 7231 date to sign (default: now)')

    credentials = parser.add_argument_group('credentials')
    credentials.add_argument('--tenancy-id', help='Tenancy OCID (env: OCI_TENANCY_ID)')
    credentials.add_argument('--user-id', help='User OCID (env: OCI_USER_ID)')
    credentials.add_argument('--fingerprint', help='API key fingerprint (env: OCI_KEY_FINGERPRINT)')
    credentials.add_argument('--key-file', help='Private key file (env: OCI_PRIVATE_KEY_FILENAME)')
    credentials.add_argument('--config-file', help='Read credentials from an OCI config file')
    credentials.add_argument(
        '--profile',
        default=DEFAULT_PROFILE,
        help=f'Profile in the config file (default: {DEFAULT_PROFILE})'
    )

    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    return parser


def load_config(args: argparse.Namespace) -> SignerConfig:
    """Resolve credentials from the config file or environment plus explicit options."""
    overrides = {
        'tenancy_id': args.tenancy_id,
        'user_id': args.user_id,
        'key_fingerprint': args.fingerprint,
        'private_key_filename': args.key_file,
    }

    if args.config_file:
        config = SignerConfig.from_file(args.config_file, args.profile)
        return replace(config, **{k: v for k, v in overrides.items() if v})

    return SignerConfig.from_env(**overrides)


def read_body(args: argparse.Namespace) -> Optional[bytes]:
    if args.body_file:
        with open(args.body_file, 'rb') as f:
            return f.read()
    if args.body is not None:
        return args.body.encode('utf-8')
    return None


def main(argv=None) -> int:
    """
    Main entry point for the CLI

    Args:
        argv: Command line arguments (None to use sys.argv)

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    try:
        signer = Signer.from_config(load_config(args))
        headers = signer.get_headers(
            args.url,
            args.method,
            read_body(args),
            args.content_type,
            args.date,
        )
    except (OCISignerError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for line in headers:
        print(line)
    return 0


if __name__ == '__main__':
    sys.exit(main())
