import argparse
import inspect
import logging
import sys
from typing import TYPE_CHECKING

from gfycat import __meta__
from gfycat.config import GfycatSetting, get_settings
from gfycat.exceptions import GfycatException
from gfycat.generator import Order, create
from gfycat.utils import fully_qualified_name, setup_loggers

if TYPE_CHECKING:
    from typing import Optional

    from gfycat.generator import Gfycat
    from gfycat.typedefs import SettingsType

LOGGER = logging.getLogger(__name__)


def setup_logger_from_options(logger, args):  # pragma: no cover
    # type: (logging.Logger, argparse.Namespace) -> None
    """
    Uses argument parser options to setup logging level from specified flags.

    Setup both the specific CLI logger that is provided and the top-level package logger.
    """
    if args.log_level:
        logger.setLevel(logging.getLevelName(args.log_level.upper()))
    elif args.quiet:
        logger.setLevel(logging.ERROR)
    elif args.verbose:
        logger.setLevel(logging.INFO)
    elif args.debug:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.WARNING)
    setup_loggers({}, force_stdout=args.stdout, log_file=args.log)
    if logger.name != __meta__.__name__:
        setup_logger_from_options(logging.getLogger(__meta__.__name__), args)


def make_logging_options(parser):
    # type: (argparse.ArgumentParser) -> None
    """
    Defines argument parser options for logging operations.
    """
    log_title = "Logging Arguments"
    log_desc = "Options that configure output logging."
    log_opts = parser.add_argument_group(title=log_title, description=log_desc)
    log_opts.add_argument("--stdout", action="store_true", help="Enforce logging to stdout for display in console.")
    log_opts.add_argument("--log", "--log-file", help="Output file to write generated logs.")
    lvl_opts = log_opts.add_mutually_exclusive_group()
    lvl_opts.add_argument("--quiet", "-q", action="store_true", help="Do not output anything else than error.")
    lvl_opts.add_argument("--debug", "-d", action="store_true", help="Enable extra debug logging.")
    lvl_opts.add_argument("--verbose", "-v", action="store_true", help="Output informative logging details.")
    lvl_names = ["DEBUG", "INFO", "WARN", "ERROR"]
    lvl_opts.add_argument("--log-level", "-l", dest="log_level",
                          choices=list(sorted(lvl_names)), type=str.upper,
                          help="Explicit log level to employ (default: %(default)s, case-insensitive).")


def positive_int(value):
    # type: (str) -> int
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"invalid positive integer value: '{value}'")
    return number


def make_parser():
    # type: () -> argparse.ArgumentParser
    """
    Generate the :term:`CLI` parser.
    """
    parser = argparse.ArgumentParser(
        prog=__meta__.__name__,
        description=__meta__.__description__,
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"%(prog)s {__meta__.__version__}",
        help="Display the version of the package."
    )
    parser.add_argument(
        "-n", "--count", dest="count", type=positive_int, default=1,
        help="Amount of names to generate, one per line (default: %(default)s)."
    )
    parser.add_argument(
        "-o", "--order", dest="order", type=str.lower, default=Order.ANIMAL_THIRD.option,
        choices=[order.option for order in Order],
        help="Position of the animal within the generated name (default: %(default)s)."
    )
    parser.add_argument(
        "-f", "--format", dest="fmt", metavar="FORMAT",
        help=inspect.cleandoc("""
            Format of the generated name with three and only three '%%s' placeholders
            (e.g.: '%%s-%%s-%%s'). Words are concatenated without separator if omitted.
        """)
    )
    parser.add_argument(
        "-s", "--seed", dest="seed", type=int,
        help="Explicit seed of the random generator to obtain reproducible names (default: current time)."
    )
    cfg_title = "Configuration Arguments"
    cfg_desc = "Options that override the settings resolved from the configuration file and environment variables."
    cfg_opts = parser.add_argument_group(title=cfg_title, description=cfg_desc)
    cfg_opts.add_argument(
        "-c", "--config", dest="config",
        help="YAML configuration file to load settings from (default: ${GFYCAT_CONFIG})."
    )
    cfg_opts.add_argument(
        "--cache-dir", dest="cache_dir",
        help="Directory where retrieved word lists are cached (default: ~/.gfycat)."
    )
    cfg_opts.add_argument(
        "--assets-url", dest="assets_url",
        help="Location of the assets host from which missing word lists are retrieved."
    )
    cfg_opts.add_argument(
        "--timeout", dest="timeout", type=float,
        help="Timeout in seconds of word list retrieval requests (default: 30)."
    )
    make_logging_options(parser)
    return parser


def get_cli_settings(args):
    # type: (argparse.Namespace) -> SettingsType
    """
    Converts the parsed configuration arguments to their corresponding settings, omitting undefined ones.
    """
    options = {
        GfycatSetting.CACHE_DIR: args.cache_dir,
        GfycatSetting.ASSETS_URL: args.assets_url,
        GfycatSetting.REQUEST_TIMEOUT: args.timeout,
        GfycatSetting.SEED: args.seed,
    }
    return {key: value for key, value in options.items() if value is not None}


def generate_names(gfy, count, order, fmt=None):
    # type: (Gfycat, int, Order, Optional[str]) -> str
    if fmt:
        names = [gfy.generate_name_order_fmt(fmt, order) for _ in range(count)]
    else:
        names = [gfy.generate_name_order(order) for _ in range(count)]
    return "\n".join(names)


def main(*args):
    # type: (*str) -> int
    parser = make_parser()
    ns = parser.parse_args(args=args or None)
    setup_logger_from_options(LOGGER, ns)
    order = Order.get(ns.order, Order.ANIMAL_THIRD)
    LOGGER.debug("Requested [%s] names with order [%s] and format [%s]", ns.count, order.option, ns.fmt)
    try:
        settings = get_settings(get_cli_settings(ns), config_file=ns.config)
        if settings.get(GfycatSetting.LOG_LEVEL) and not ns.log_level:
            setup_loggers(settings)
        gfy = create(settings)
        result = generate_names(gfy, ns.count, order, ns.fmt)
    except (GfycatException, TypeError, ValueError) as exc:
        LOGGER.error("Name generation failed. [%s] %s", fully_qualified_name(exc), exc)
        print(f"{__meta__.__name__}: error: {exc!s}", file=sys.stderr)
        return -1
    print(result)  # use print in case logger disabled or level error/warn
    return 0


if __name__ == "__main__":
    sys.exit(main())
