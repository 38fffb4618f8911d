"""CLI entrypoint for bdpack builds."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any, Dict

from .config import resolve_config
from .errors import BdpackError
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_flag(parser: argparse.ArgumentParser, short: str, long: str, help_text: str) -> None:
    # SUPPRESS keeps unset flags out of the namespace so file configuration is not overridden.
    parser.add_argument(
        short,
        long,
        dest=long.lstrip("-"),
        action="store_true",
        default=argparse.SUPPRESS,
        help=help_text,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bdpack",
        description=(
            "Build BetterDiscord plugins dependent on Zere's Plugin Library. "
            "Options are read from the defaultConfig field of package.json, then config.json, "
            "then the buildConfig field of package.json, then the command line."
        ),
    )
    parser.add_argument(
        "-p",
        "--pluginFolder",
        dest="pluginFolder",
        default=argparse.SUPPRESS,
        help="Path to the plugin to build, or to the folder of plugins with --multiPlugin.",
    )
    parser.add_argument(
        "-r",
        "--releaseFolder",
        dest="releaseFolder",
        default=argparse.SUPPRESS,
        help="Folder where built plugins are placed. May contain {{PLUGIN_NAME}}.",
    )
    _add_flag(
        parser,
        "-c",
        "--copyToBD",
        "Also copy the built plugin into your BetterDiscord plugins folder.",
    )
    _add_flag(
        parser,
        "-i",
        "--addInstallScript",
        "Include the Windows Script Host install script so double-clicking the plugin offers to install it.",
    )
    _add_flag(parser, "-l", "--packLib", "Use the template that packs all library functions into the plugin.")
    _add_flag(
        parser,
        "-m",
        "--multiPlugin",
        "Build every plugin directory inside pluginFolder instead of treating it as one plugin.",
    )
    _add_flag(
        parser,
        "-o",
        "--oldHeader",
        "Generate the legacy ZLibrary header instead of passing every config.info key through as JSDoc.",
    )
    parser.add_argument(
        "--config",
        dest="config_file",
        type=Path,
        default=None,
        help="Local configuration file (JSON or YAML). Defaults to ./config.json.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Only report warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        dest="log_file",
        type=Path,
        default=None,
        help="Also write a DEBUG-level build log to this file.",
    )
    return parser


def cli_options(args: argparse.Namespace) -> Dict[str, Any]:
    """Return only the build options the user passed explicitly."""
    options = dict(vars(args))
    for key in ("config_file", "verbose", "quiet", "log_file"):
        options.pop(key, None)
    return options


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for bdpack."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=args.log_file)

    cwd = Path.cwd()
    try:
        config = resolve_config(cwd, cli_options(args), config_file=args.config_file)
        report = asyncio.run(Orchestrator(config, cwd=cwd).run())
    except BdpackError as exc:
        parser.exit(1, f"bdpack build failed: {exc}\nRun with --verbose for more details.\n")

    for result in report.built:
        print(f"{result.plugin_name} -> {_relativize(result.artifact)}")
    for skipped in report.skipped:
        print(f"skipped {_relativize(skipped)} (no config.json)")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
