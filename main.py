# main.py

import argparse
import asyncio
import json
import sys
from typing import Optional

from mtran_client.config_management import ConfigManager
from mtran_client.errors import MTranError
from mtran_client.logger import Logger
from mtran_client.translators import translator_factory
from mtran_client.translators.mtran_translator import MTranTranslator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="MTranServer translation client")
    parser.add_argument("--mode", type=str, choices=["dev", "prod"], default="prod")
    parser.add_argument("--config", type=str, default=None, help="Path to a YAML config")
    parser.add_argument("--api-url", type=str, default=None, help="Override server URL")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("health", help="Check whether the server is up")
    sub.add_parser("models", help="List models installed on the server")
    sub.add_parser("version", help="Show the server version")

    for name, help_text in (
        ("translate", "Translate a single text"),
        ("batch", "Translate several texts in one request"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("texts", nargs="+" if name == "batch" else None)
        cmd.add_argument("--from", dest="source_lang", default="auto")
        cmd.add_argument("--to", dest="target_lang", required=True)
        cmd.add_argument("--detect", default=None, help="Detected source language")
    return parser


async def run(args: argparse.Namespace, translator: MTranTranslator, server) -> int:
    if args.command == "health":
        healthy = await translator.check_api(server)
        print("ok" if healthy else "unavailable")
        return 0 if healthy else 1

    if args.command == "models":
        print(json.dumps(await translator.get_models(server), indent=2, ensure_ascii=False))
    elif args.command == "version":
        print(await translator.get_version(server))
    elif args.command == "translate":
        print(
            await translator.translate(
                args.texts,
                args.target_lang,
                args.source_lang,
                detect=args.detect,
                server=server,
            )
        )
    elif args.command == "batch":
        results = await translator.translate_batch(
            args.texts,
            args.target_lang,
            args.source_lang,
            detect=args.detect,
            server=server,
        )
        for line in results:
            print(line)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    dev_mode = args.mode == "dev"
    logger = Logger("main", level="DEBUG" if dev_mode else "ERROR")
    logger.info(f"Application starting in '{args.mode}' mode.")

    try:
        config_manager = ConfigManager(logger, dev=dev_mode, config_file=args.config)
        translator_config = config_manager.translator_config()
        translator = translator_factory(logger, translator_config)

        server = None
        if args.api_url:
            server = {
                "apiUrl": args.api_url,
                "token": translator_config["translation"]["mtran"].get("token"),
            }

        return asyncio.run(run(args, translator, server))
    except FileNotFoundError as e:
        print(f"Config file not found: {e.filename}", file=sys.stderr)
        return 2
    except MTranError as e:
        print(e, file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        logger.info("Exited by user.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
