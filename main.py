"""
tgmarkup command line tool: render the feature showcase, list and resolve
code block languages, escape strings for a parse mode.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from tgmarkup import (
    EscapeContext,
    Language,
    Mode,
    Node,
    UnsupportedLanguageError,
    bold,
    code,
    customEmoji,
    escape,
    expandableQuote,
    group,
    italic,
    link,
    mention,
    pre,
    quote,
    renderMessage,
    spoiler,
    strike,
    text,
    underline,
)
from tgmarkup.config import ConfigManager, mergeConfigs
from tgmarkup.exceptions import TgMarkupError
from tgmarkup.logging_utils import initLogging
from tgmarkup.utils import debugDump, jsonDumps

# Configure basic logging first
logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO)
logger = logging.getLogger(__name__)

SHOWCASE_USER_ID = 777000
SHOWCASE_EMOJI_ID = "5368324170671202286"

# Used for keys missing from [logging]
DEFAULT_LOGGING_CONFIG = {"level": "WARNING", "console": True}


def buildShowcase(title: str) -> Node:
    """Build tree using every node kind, nested styles included. Renders in any mode."""
    return group(
        text(title),
        "\n\n",
        # Inline styles
        bold("bold text"),
        "\n",
        italic("italic text"),
        "\n",
        underline("underline"),
        "\n",
        strike("strikethrough"),
        "\n",
        spoiler("spoiler"),
        "\n",
        group(
            bold(
                italic(
                    "italic bold ",
                    strike("italic bold strikethrough "),
                    spoiler("italic bold strikethrough spoiler"),
                    " ",
                    underline("underline italic bold"),
                ),
            ),
            " ",
            bold("bold"),
        ),
        "\n",
        # Links, mentions, emoji
        link("inline URL", "http://www.example.com/"),
        "\n",
        mention("inline mention of a user", SHOWCASE_USER_ID),
        "\n",
        customEmoji(SHOWCASE_EMOJI_ID, "👍"),
        "\n",
        # Code
        code("inline fixed-width code"),
        "\n",
        pre("pre-formatted fixed-width code block"),
        "\n",
        pre("pre-formatted fixed-width code block written in the Python programming language", Language.PYTHON),
        "\n",
        # Quotes
        quote(
            "Block quotation started",
            "Block quotation continued",
            "The last line of the block quotation",
        ),
        "\n",
        expandableQuote(
            "Expandable block quotation started",
            "Expandable block quotation continued",
            "Expandable block quotation continued",
            "Hidden by default part of the block quotation started",
            "Expandable block quotation continued",
            "The last line of the block quotation",
        ),
    )


def parseArguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    modeChoices = [mode.value for mode in Mode]

    parser = argparse.ArgumentParser(
        description="tgmarkup - render Telegram message markup for HTML, Markdown and MarkdownV2"
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to configuration file (default: built-in defaults)",
    )
    parser.add_argument(
        "--config-dir",
        action="append",
        help="Directory to search for .toml config files recursively (can be specified multiple times)",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Pretty-print loaded configuration and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    showcaseParser = subparsers.add_parser("showcase", help="Render the feature showcase message")
    showcaseParser.add_argument("--mode", choices=modeChoices, help="Render mode (default: from config)")
    showcaseParser.add_argument("--title", default=None, help='Showcase title (default: "<mode> showcase")')

    languagesParser = subparsers.add_parser("languages", help="List canonical code block languages")
    languagesParser.add_argument(
        "--aliases",
        action="store_true",
        help="Also print display name and every alias of each language",
    )

    resolveParser = subparsers.add_parser("resolve", help="Resolve language name or alias to its canonical tag")
    resolveParser.add_argument("name", help="Language name or alias, e.g. py")
    resolveParser.add_argument("--strict", action="store_true", help="Treat unknown language as an error")

    escapeParser = subparsers.add_parser("escape", help="Escape string for a render mode")
    escapeParser.add_argument("text", help="Text to escape")
    escapeParser.add_argument("--mode", choices=modeChoices, help="Render mode (default: from config)")
    escapeParser.add_argument(
        "--kind",
        choices=[context.value for context in EscapeContext],
        default=EscapeContext.TEXT.value,
        help="Content class of the text (default: text)",
    )

    args = parser.parse_args(argv)

    if args.config is not None:
        args.config = os.path.abspath(args.config)
    if args.config_dir:
        args.config_dir = [os.path.abspath(dirPath) for dirPath in args.config_dir]
    if not args.print_config and args.command is None:
        parser.error("a command is required unless --print-config is given")

    return args


def prettyPrintConfig(configManager: ConfigManager) -> None:
    """Pretty-print the loaded configuration."""
    print("=== tgmarkup Configuration ===")
    print()
    # TOML dates and times are printed via str()
    print(jsonDumps(configManager.config, indent=2))
    print()
    print("=== Configuration loaded successfully ===")


def cmdShowcase(args: argparse.Namespace, configManager: ConfigManager) -> int:
    mode = Mode.fromValue(args.mode) if args.mode else configManager.getDefaultMode()
    title = args.title if args.title is not None else f"{mode.value} showcase"

    message = renderMessage(buildShowcase(title), mode)
    logger.debug(debugDump(mode.value, message.text))
    if configManager.getRenderConfig()["check-length"] and message.isTooLong():
        logger.warning(f"Rendered showcase is {len(message.text)} characters long, Telegram will reject it")

    print(message.text)
    return 0


def cmdLanguages(args: argparse.Namespace, configManager: ConfigManager) -> int:
    registry = configManager.buildLanguageRegistry()
    for tag in registry.listCanonicalTags():
        if args.aliases:
            displayName = registry.displayName(tag) or ""
            print(f"{tag}\t{displayName}\t{','.join(registry.aliasesFor(tag))}")
        else:
            print(tag)
    return 0


def cmdResolve(args: argparse.Namespace, configManager: ConfigManager) -> int:
    registry = configManager.buildLanguageRegistry()
    if args.strict:
        try:
            print(registry.mustNormalize(args.name))
        except UnsupportedLanguageError as e:
            logger.error(e)
            return 2
        return 0

    tag = registry.normalize(args.name)
    if tag is None:
        print("not found")
        return 1
    print(tag)
    return 0


def cmdEscape(args: argparse.Namespace, configManager: ConfigManager) -> int:
    mode = Mode.fromValue(args.mode) if args.mode else configManager.getDefaultMode()
    print(escape(mode, args.text, EscapeContext(args.kind)))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point, returns process exit code."""
    args = parseArguments(argv)

    try:
        configManager = ConfigManager(configPath=args.config, configDirs=args.config_dir)

        if args.print_config:
            prettyPrintConfig(configManager)
            return 0

        initLogging(mergeConfigs(DEFAULT_LOGGING_CONFIG, configManager.getLoggingConfig()))

        match args.command:
            case "showcase":
                return cmdShowcase(args, configManager)
            case "languages":
                return cmdLanguages(args, configManager)
            case "resolve":
                return cmdResolve(args, configManager)
            case "escape":
                return cmdEscape(args, configManager)
            case _:
                raise ValueError(f"Unknown command: {args.command}")
    except TgMarkupError as e:
        logger.error(f"tgmarkup error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
