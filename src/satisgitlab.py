"""satis-gitlab - generate SATIS configuration scanning gitlab repositories

Looks for composer.json in the default branch of every GitLab project,
extracts the package name and registers the project in a SATIS config file.

    Returns:
        int: Exit code
"""
import logging
import sys

from args import parse_args
from cli_config import ConfigFileError, apply_config, load_config_file, resolve_token
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes
from filters import (
    FilterChain,
    FilterConstructionError,
    GitlabNamespaceFilter,
    IgnoreRegexpFilter,
    IncludeIfHasFileFilter,
    ProjectTypeFilter,
)
from repository.errors import TransportError
from repository.gitlab import GitLabClient
from repository.models import ClientOptions
from satis.config_builder import ConfigBuilder, TemplateError
from scan.manifest import ManifestExtractor
from scan.orchestrator import ScanOrchestrator

logger = logging.getLogger(__name__)


def _setup_logging(args):
    """Configure logging based on CLI arguments."""
    configure_logging(getattr(args, "LOG_LEVEL", None))
    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def build_filter_chain(args, client):
    """Create project filters according to input arguments.

    Raises:
        FilterConstructionError: when an option value is unusable
    """
    chain = FilterChain()
    if args.IGNORE:
        chain.add_filter(IgnoreRegexpFilter(args.IGNORE))
    if args.INCLUDE_IF_HAS_FILE:
        chain.add_filter(IncludeIfHasFileFilter(client, args.INCLUDE_IF_HAS_FILE))
    if args.PROJECT_TYPE:
        chain.add_filter(ProjectTypeFilter(args.PROJECT_TYPE, client))
    if args.GITLAB_NAMESPACE:
        chain.add_filter(GitlabNamespaceFilter(str(args.GITLAB_NAMESPACE)))
    for project_filter in chain:
        logger.info("Filter enabled : %s", project_filter.description)
    return chain


def build_config(args, client_options):
    """Create the SATIS configuration builder and apply CLI customizations.

    Raises:
        TemplateError: when the template cannot be loaded
    """
    if args.TEMPLATE:
        logger.info("Loading template %s...", args.TEMPLATE)
    config_builder = ConfigBuilder(args.TEMPLATE)

    if args.HOMEPAGE:
        config_builder.set_homepage(args.HOMEPAGE)
    if args.ARCHIVE:
        config_builder.enable_archive()

    # Register gitlab domain to enable composer gitlab-* authentications
    gitlab_domain = client_options.host
    if gitlab_domain:
        config_builder.add_gitlab_domain(gitlab_domain)
        if not args.NO_TOKEN and client_options.has_token:
            config_builder.add_gitlab_token(
                gitlab_domain,
                client_options.token,
                client_options.unsafe_ssl,
            )
    return config_builder


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    try:
        config = load_config_file(args.CONFIG) if args.CONFIG else {}
        apply_config(args, config)
    except ConfigFileError as e:
        logger.error("%s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    if not args.GITLAB_URL:
        logger.error("gitlab-url is required (argument or config file)")
        sys.exit(ExitCodes.SETUP_ERROR.value)

    client_options = ClientOptions(
        url=str(args.GITLAB_URL),
        token=resolve_token(args),
        unsafe_ssl=bool(args.UNSAFE_SSL),
    )
    client = GitLabClient(client_options)

    try:
        filter_chain = build_filter_chain(args, client)
    except FilterConstructionError as e:
        logger.error("Invalid filter option: %s", e)
        sys.exit(ExitCodes.SETUP_ERROR.value)

    try:
        config_builder = build_config(args, client_options)
    except TemplateError as e:
        logger.error("%s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    # SCAN gitlab projects to find composer.json file in default branch
    logger.info("Listing gitlab repositories from %s...", client_options.url)
    orchestrator = ScanOrchestrator(
        client,
        filter_chain,
        ManifestExtractor(client),
        config_builder,
        max_pages=int(args.MAX_PAGES),
        unsafe_ssl=client_options.unsafe_ssl,
    )
    try:
        result = orchestrator.run(search=args.PROJECT_FILTER)
    except TransportError as e:
        logger.error("Failed to list gitlab projects: %s", e)
        sys.exit(ExitCodes.CONNECTION_ERROR.value)

    # Write resulting config
    logger.info("Generate satis configuration file : %s", args.OUTPUT)
    try:
        config_builder.write(args.OUTPUT)
    except OSError as e:
        logger.error("Satis configuration couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    if result.no_project_found and args.ERROR_ON_EMPTY:
        sys.exit(ExitCodes.NO_PROJECT_FOUND.value)
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
