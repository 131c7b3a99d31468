#!/usr/bin/env python3
import argparse
import logging
import sys

from translator import MAX_TOKEN_LEN, ParseError, TokenOverflowError, translate


def read_file(p):
    with open(p, "r", encoding="utf-8") as f:
        return f.read()


def positive_int(text):
    try:
        n = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{text}'")
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


def build_parser():
    ap = argparse.ArgumentParser(
        prog="mini-translate",
        description="Translate assignment/print programs into accumulator instructions.")
    ap.add_argument("input", help="source file to translate")
    ap.add_argument("-o", "--output", help="write instructions here instead of stdout")
    ap.add_argument("--strict", action="store_true",
                    help="treat stray tokens between statements as syntax errors")
    ap.add_argument("--max-token-len", type=positive_int, default=MAX_TOKEN_LEN,
                    help="longest identifier or integer literal accepted (default: %(default)s)")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def main(argv=None):
    ap = build_parser()
    try:
        args = ap.parse_args(argv)
    except SystemExit as e:
        # argparse exits 2 on usage errors; keep the documented 1
        return 0 if e.code == 0 else 1

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="[%(levelname)s] %(message)s")

    print("--- Simple Compiler ---")
    print(f"Compiling file: {args.input}\n")

    try:
        source = read_file(args.input)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: Could not open file {args.input} ({e})")
        return 1

    out = None
    try:
        if args.output:
            out = open(args.output, "w", encoding="utf-8")
        translate(source, out=out if out is not None else sys.stdout,
                  strict=args.strict, max_len=args.max_token_len)
    except ParseError as e:
        print(f"Syntax Error: {e.msg}")
        return 1
    except TokenOverflowError as e:
        print(f"Error: {e}")
        return 1
    except OSError as e:
        print(f"Error: Could not write {args.output} ({e})")
        return 1
    finally:
        if out is not None:
            out.close()

    print("\n--- Compilation Complete ---")
    return 0


if __name__ == "__main__":
    sys.exit(main())
