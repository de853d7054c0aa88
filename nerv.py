#!/usr/bin/env python3

import argparse
import logging
import sys

from ner.errors import NergenError
from ner.session import Session
from ner.windower import rewindow

logger = logging.getLogger("nerv")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description=(
            "Add previous/next tag context to a 'word<TAB>tag' or "
            "'word<TAB>ner<TAB>tag' stream."
        )
    )
    parser.add_argument(
        "input_file", nargs="?", help="Tagged input file; stdin when omitted"
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Write output to this file (UTF-8, LF line endings). If omitted, output goes to stdout.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level), format="[%(levelname)s] %(message)s"
    )

    session = Session()
    in_stream = sys.stdin
    out_stream = sys.stdout
    try:
        if args.input_file:
            in_stream = open(args.input_file, "r", encoding="utf-8")
        if args.output:
            out_stream = open(args.output, "w", encoding="utf-8", newline="\n")
        rewindow(in_stream, out_stream, session)
    except OSError as e:
        logger.error("%s", e)
        return 1
    except NergenError as e:
        logger.error("%s", e)
        return 1
    finally:
        if in_stream is not sys.stdin:
            in_stream.close()
        if out_stream is not sys.stdout:
            out_stream.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
