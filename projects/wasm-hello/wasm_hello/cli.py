#!/usr/bin/env python3

import argparse
import logging
import sys
from pathlib import Path

from ferris_utils.cli import FerrisClient
from ferris_utils.record import format_record
from wasm_hello.abi import AbiError, decode_reply, encode_call, invoke
from wasm_hello.bindings import BindingsProjectGenerator
from wasm_hello.settings import DEFAULT_BINDINGS_DIR

logger = logging.getLogger("ferris")


class WasmHelloClient(FerrisClient):
    def add_arguments(self, parser: argparse.ArgumentParser):
        subparsers = parser.add_subparsers(required=True, dest="command")

        # --- Subcommand: call ---
        call_parser = subparsers.add_parser("call", help="Call an export across the binary boundary")
        call_subparsers = call_parser.add_subparsers(required=True, dest="export")
        add_parser = call_subparsers.add_parser("add", help="32-bit signed addition")
        add_parser.add_argument("a", type=int)
        add_parser.add_argument("b", type=int)
        greet_parser = call_subparsers.add_parser("greet", help="Format a greeting")
        greet_parser.add_argument("name")

        # --- Subcommand: bindings ---
        bindings_parser = subparsers.add_parser("bindings", help="Write C host bindings")
        bindings_parser.add_argument(
            "out", nargs="?", default=DEFAULT_BINDINGS_DIR, metavar="OUTPUT_DIR"
        )

    def run(self) -> int:
        match self.args.command:
            case "call":
                return self.call()
            case "bindings":
                out_dir = Path(self.args.out).absolute()
                if out_dir.is_file():
                    self.argument_parser.error("bindings output requires a directory, found a file!")
                for path in BindingsProjectGenerator(out_dir).create():
                    print(path)
        return 0

    def call(self) -> int:
        name = self.args.export
        args = (self.args.a, self.args.b) if name == "add" else (self.args.name,)
        try:
            reply = invoke(name, encode_call(name, *args))
        except AbiError as err:
            logger.error(f"{name}: {err}")
            return 1
        result = decode_reply(name, reply)
        logger.info(f"{name}: {len(reply)} byte reply")

        print(result)
        print(format_record(name, args=list(args), result=result))
        return 0


def app():
    cli = WasmHelloClient("wasm-hello", "WasmHello", "Exported add/greet functions")
    sys.exit(cli.start())


if __name__ == "__main__":
    app()
