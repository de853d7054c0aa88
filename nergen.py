#!/usr/bin/env python3

import argparse
import logging
import os
import sys

from ner import __version__
from ner.config_parser import parse_file
from ner.configuration import (
    NER_SECTION,
    REQUIRED_NER_KEYS,
    TAGGER_SECTION,
    Configuration,
    default_configuration,
    template_configuration,
    template_file_name,
)
from ner.errors import ConfigError, MissingSettingError, NergenError, OutputError
from ner.gazetteer import GazetteerIndex
from ner.merge import MergeMode
from ner.pipeline import TrainingDataGenerator
from ner.session import Session
from ner.tagger import MbtTagger
from ner.trainer import build_trainer_command, run_trainer

HEARTBEAT_DOT = 100
HEARTBEAT_LINE = 8000

logger = logging.getLogger("nergen")


def heartbeat(count: int) -> None:
    """Print a dot every HEARTBEAT_DOT sentences, a newline every HEARTBEAT_LINE."""
    if count % HEARTBEAT_LINE == 0:
        sys.stderr.write("\n")
    if count % HEARTBEAT_DOT == 0:
        sys.stderr.write(".")
        sys.stderr.flush()


def prepare_output_dir(output_dir, config_file) -> str:
    """Create the output directory if needed; default to the config file's directory."""
    if output_dir:
        try:
            os.makedirs(output_dir, exist_ok=True)
        except OSError as e:
            raise OutputError(f"output dir not usable: {output_dir}: {e}") from e
        if not os.access(output_dir, os.W_OK):
            raise OutputError(f"output dir not usable: {output_dir}")
        return output_dir
    if config_file:
        return os.path.dirname(config_file)
    return ""


def merge_mode(args) -> MergeMode:
    if args.bootstrap:
        return MergeMode.BOOTSTRAP
    if args.override:
        return MergeMode.OVERRIDE
    return MergeMode.PASS_THROUGH


def run(args) -> int:
    if args.running and not args.bootstrap:
        logger.error("option --running only allowed for --bootstrap")
        return 1

    config = Configuration()
    if args.config:
        config = parse_file(args.config)
        sys.stderr.write(f"using configuration: {args.config}\n")
    output_dir = prepare_output_dir(args.output_dir, args.config)
    if args.base_name:
        config.set("baseName", args.base_name, NER_SECTION)
    config.merge(default_configuration())

    gazetteer_name = args.gazetteer or config.lookup("known_ners", NER_SECTION)
    if not gazetteer_name:
        raise MissingSettingError("known_ners", NER_SECTION)
    gazetteer_name = os.path.realpath(gazetteer_name)
    try:
        max_ner_size = int(config.lookup("max_ner_size", NER_SECTION))
    except ValueError as e:
        raise ConfigError(f"max_ner_size must be a number: {e}") from e
    gazetteer = GazetteerIndex.from_spec_file(gazetteer_name, max_ner_size)

    # all required settings must be known before any processing starts
    for key in REQUIRED_NER_KEYS:
        config.require(key, NER_SECTION)
    if not args.bootstrap:
        config.require("settings", TAGGER_SECTION)
    base_name = config.lookup("baseName", NER_SECTION)
    out_base = os.path.join(output_dir, base_name)

    session = Session(gazetteer=gazetteer)
    generator = TrainingDataGenerator(
        session,
        mode=merge_mode(args),
        progress_callback=None if args.quiet else heartbeat,
    )

    if args.bootstrap:
        out_name = out_base + ".boosted"
        generator.create_boot_file(args.input_file, out_name, running=args.running)
        sys.stderr.write(
            f"\nCreated a new bootstrapped nergen data file: {out_name}\n"
        )
        return 0

    settings_dir = config.config_dir or output_dir
    pos_settings = os.path.join(settings_dir, config.lookup("settings", TAGGER_SECTION))
    data_name = out_base + ".data"
    with MbtTagger(pos_settings, executable=args.tagger) as tagger:
        generator.tagger = tagger
        sys.stderr.write(
            f"Start enriching: {args.input_file} with POS tags"
            " (every dot represents 100 tagged sentences)\n"
        )
        generator.create_train_file(args.input_file, data_name)
    sys.stderr.write(f"\nCreated a trainingfile: {data_name}\n")

    command = build_trainer_command(
        config,
        data_name,
        out_base + ".settings",
        marker_seen=session.marker_seen,
        keep_intermediate=args.keep_x,
        executable=args.trainer,
    )
    sys.stderr.write(
        "this may take several minutes, depending on the corpus size.\n"
    )
    run_trainer(command)
    sys.stderr.write("finished tagger\n")

    settings_name = os.path.join(
        os.path.realpath(output_dir or "."), base_name + ".settings"
    )
    template = template_configuration(config, settings_name, gazetteer_name)
    cfg_out = os.path.join(output_dir, template_file_name(args.config))
    template.write(cfg_out)
    sys.stderr.write(f"stored a configfile template: {cfg_out}\n")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description=(
            "Convert an IOB tagged corpus into a training file enriched with "
            "POS tags and gazetteer information, then train an NER tagger on it."
        )
    )
    parser.add_argument("input_file", nargs="?", help="Corpus to convert")
    parser.add_argument(
        "-c",
        "--config",
        help="Existing configuration file, enriched with NER specific settings",
    )
    parser.add_argument(
        "-O",
        "--output-dir",
        help="Directory where all output files are stored",
    )
    parser.add_argument(
        "-g",
        "--gazetteer",
        help="Gazetteer specification file with 'category<TAB>listfile' lines",
    )
    parser.add_argument("-b", "--base-name", help="Base name of the output files")
    parser.add_argument(
        "-X",
        "--keep-x",
        action="store_true",
        help="Keep the trainer's intermediate files",
    )
    parser.add_argument(
        "--override",
        action="store_true",
        help="Replace O tags with gazetteer derived tags, only where there is no conflict",
    )
    parser.add_argument(
        "--bootstrap",
        action="store_true",
        help="Replace ALL tags with gazetteer derived tags and write a new corpus",
    )
    parser.add_argument(
        "--running",
        action="store_true",
        help="With --bootstrap: the input is running text, one sentence per line",
    )
    parser.add_argument("--tagger", default="Mbt", help="POS tagger executable")
    parser.add_argument("--trainer", default="Mbtg", help="Trainer executable")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress progress dots",
    )
    parser.add_argument(
        "-V", "--version", action="store_true", help="Show version and exit"
    )

    args = parser.parse_args(argv)

    if args.version:
        print(f"nergen: {__version__}")
        return 0

    logging.basicConfig(
        level=getattr(logging, args.log_level), format="[%(levelname)s] %(message)s"
    )

    if not args.input_file:
        logger.error("missing inputfile")
        parser.print_usage(sys.stderr)
        return 1

    try:
        return run(args)
    except NergenError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
