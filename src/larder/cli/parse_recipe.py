"""CLI command that turns a recipe page into a JSON preview."""

from __future__ import annotations

import argparse
from dataclasses import replace
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

from larder.config import FetchSettings
from larder.extraction import InvalidRecipeUrlError, extract_recipe, validate_source_url
from larder.fetching import FetchError, PageFetcher

logger = logging.getLogger(__name__)


def _configure_logging(settings: FetchSettings) -> None:
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=settings.log_level_number,
    )


def _load_markup(url: str, html_file: str | None, settings: FetchSettings) -> str:
    if html_file:
        return Path(html_file).read_text(encoding="utf-8", errors="replace")
    return PageFetcher(settings).fetch(url)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(description="Extract a recipe preview (title, servings, ingredients) from a page")
    parser.add_argument("--url", required=True, help="Absolute http(s) URL of the recipe page")
    parser.add_argument(
        "--html-file",
        default=None,
        help="Read markup from this file instead of fetching the URL",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Override LARDER_LOG_LEVEL",
    )
    args = parser.parse_args(argv)

    try:
        settings = FetchSettings.from_env()
    except ValueError as exc:
        print(json.dumps({"url": args.url, "error": f"Configuration error: {exc}"}, ensure_ascii=True, indent=2))
        return 2

    if args.log_level:
        settings = replace(settings, log_level=args.log_level)
    _configure_logging(settings)

    try:
        url = validate_source_url(args.url)
        markup = _load_markup(url, args.html_file, settings)
        preview = extract_recipe(markup, url)
    except (InvalidRecipeUrlError, FetchError, OSError) as exc:
        logger.error("Recipe extraction failed: %s", exc)
        print(json.dumps({"url": args.url, "error": str(exc)}, ensure_ascii=True, indent=2))
        return 1

    if not preview.ingredients:
        logger.warning("No ingredients found on %s; they will need to be entered manually", url)

    print(json.dumps(preview.to_dict(), ensure_ascii=True, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
