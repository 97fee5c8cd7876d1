"""Argument parsing functionality for satis-gitlab."""

import argparse

from constants import Constants


def positive_int(value):
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return number


def build_parser():
    """Build the ``gitlab-to-config`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="satis-gitlab",
        description=(
            "Generate SATIS configuration scanning gitlab repositories: look for "
            "composer.json in the default branch, extract the project name and "
            "register it in the SATIS configuration"
        ),
        add_help=True,
    )

    # Git client options
    parser.add_argument("GITLAB_URL",
                        metavar="gitlab-url",
                        help="GitLab instance URL, e.g. https://gitlab.example.com",
                        nargs="?")
    parser.add_argument("GITLAB_TOKEN",
                        metavar="gitlab-token",
                        help="GitLab access token (defaults to the GITLAB_TOKEN environment variable)",
                        nargs="?")
    parser.add_argument("--unsafe-ssl",
                        dest="UNSAFE_SSL",
                        help="Disable TLS certificate verification",
                        action="store_true",
                        default=None)

    # Project listing options (git level)
    parser.add_argument("-p", "--projectFilter",
                        dest="PROJECT_FILTER",
                        help="filter for projects (GitLab search)",
                        action="store", type=str)
    parser.add_argument("--max-pages",
                        dest="MAX_PAGES",
                        help=f"stop listing after this many pages (default: {Constants.MAX_PAGES})",
                        action="store", type=positive_int)

    # Project filters
    parser.add_argument("-i", "--ignore",
                        dest="IGNORE",
                        help='ignore project according to a regexp, for ex : "(^phpstorm|^typo3/library)"',
                        action="store", type=str)
    parser.add_argument("--include-if-has-file",
                        dest="INCLUDE_IF_HAS_FILE",
                        help='include in satis config if project contains a given file, for ex : ".satisinclude"',
                        action="store", type=str)
    parser.add_argument("--project-type",
                        dest="PROJECT_TYPE",
                        help='include in satis config if project is of a specified type, for ex : "library"',
                        action="store", type=str)
    parser.add_argument("--gitlab-namespace",
                        dest="GITLAB_NAMESPACE",
                        help='include in satis config if gitlab project namespace is in the list, for ex : "2,Diaspora"',
                        action="store", type=str)

    # satis config generation options
    parser.add_argument("--template",
                        dest="TEMPLATE",
                        help="template satis.json extended with gitlab repositories",
                        action="store", type=str)
    parser.add_argument("--homepage",
                        dest="HOMEPAGE",
                        help="satis homepage",
                        action="store", type=str)
    parser.add_argument("--archive",
                        dest="ARCHIVE",
                        help="enable archive mirroring",
                        action="store_true",
                        default=None)
    parser.add_argument("--no-token",
                        dest="NO_TOKEN",
                        help="disable token writing in output configuration",
                        action="store_true",
                        default=None)

    # output options
    parser.add_argument("-O", "--output",
                        dest="OUTPUT",
                        help=f"output config file (default: {Constants.DEFAULT_OUTPUT_FILE})",
                        action="store", type=str)
    parser.add_argument("--error-on-empty",
                        dest="ERROR_ON_EMPTY",
                        help="Exit with a non-zero status code if no project is found.",
                        action="store_true",
                        default=None)

    # Config file and logging
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML) providing option defaults",
                        action="store", type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level (default: SATIS_GITLAB_LOG_LEVEL or INFO)",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
