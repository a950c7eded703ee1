"""
GetTranslated command line demo.

Initializes the SDK, optionally switches language, and prints the
translation of each text given on the command line.

    gettranslated --api-key KEY --language es "Hello" "Good morning"
    GETTRANSLATED_API_KEY=KEY python -m gettranslated.main "Hello"
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from gettranslated.client import GetTranslated
from gettranslated.config import InitOptions, Settings, get_settings
from gettranslated.core.results import Result


async def run(
    args: argparse.Namespace,
    settings: Settings,
    client: GetTranslated | None = None,
) -> int:
    client = client or GetTranslated(settings=settings)
    options = InitOptions(server_url=args.server_url) if args.server_url else None
    
    result = await client.initialize(
        api_key=args.api_key,
        user_id=args.user_id,
        log_level=args.log_level,
        options=options,
    )
    if not result.ok:
        print(f"Initialization failed ({result.code}): {result.message}", file=sys.stderr)
        return 1
    
    languages = sorted(client.get_languages())
    print(f"User: {client.user_id}")
    print(f"Languages ({len(languages)}): {', '.join(languages)}")
    
    if args.language and not client.set_language(args.language, persist=not args.no_save):
        print(f"Language {args.language} is not supported", file=sys.stderr)
    print(f"Current language: {client.get_current_language()}")
    
    results: dict[str, Result] = {}
    for text in args.texts:
        client.get_dynamic_string(text, callback=lambda r, t=text: results.__setitem__(t, r))
    
    await client.wait_for_pending()
    
    for text in args.texts:
        outcome = results.get(text)
        if outcome is None:
            print(f"{text} -> {text}")
        elif outcome.ok:
            print(f"{text} -> {outcome.value}")
        else:
            print(f"{text} -> error ({outcome.code}): {outcome.message}")
    
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the demo from the command line."""
    parser = argparse.ArgumentParser(
        description="Translate strings with the GetTranslated SDK"
    )
    parser.add_argument(
        "texts",
        nargs="*",
        help="Texts to translate"
    )
    parser.add_argument(
        "--api-key", "-k",
        help="API key (default: GETTRANSLATED_API_KEY)"
    )
    parser.add_argument(
        "--user-id", "-u",
        help="User id (default: anonymous)"
    )
    parser.add_argument(
        "--language", "-l",
        help="Switch to this language after initializing"
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not save --language as the user's preference"
    )
    parser.add_argument(
        "--server-url",
        help="Server base URL (default: GETTRANSLATED_SERVER_URL or production)"
    )
    parser.add_argument(
        "--log-level",
        choices=["error", "warn", "info", "debug", "verbose"],
        help="SDK log level"
    )
    parser.add_argument(
        "--storage-path",
        help="JSON file for the local cache (default: in-memory)"
    )
    
    args = parser.parse_args(argv)
    
    settings = get_settings()
    if args.storage_path:
        settings = settings.model_copy(update={"storage_path": args.storage_path})
    
    return asyncio.run(run(args, settings))


if __name__ == "__main__":
    sys.exit(main())
