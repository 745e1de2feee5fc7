#!/usr/bin/env python3
"""
Ontology Interpreter CLI - Interpret an RDF/OWL file and print a summary

Usage:
    # Interpret with settings from config.yaml
    ontology-interpret data/zoo.owl

    # Fixed worker count, JSON output
    ontology-interpret data/zoo.owl --workers 4 --json

    # Ask on stdin which namespace to use if the file declares no default prefix
    ontology-interpret data/zoo.owl --select prompt

Exit codes:
    0 success, 1 file not found, 2 not an ontology file, 3 build failure,
    4 invalid configuration
"""

import sys
import json
import argparse
from typing import List, Optional, Set

from ontology_interpreter.core.config import ConfigLoader, set_config
from ontology_interpreter.core.domain import InstanceType, Ontology
from ontology_interpreter.core.exceptions import (
    ConfigError,
    InterpreterError,
    OntologyFileError,
    OntologyFileNotFoundError,
)
from ontology_interpreter.core.interpreter import RDFInterpreterFactory
from ontology_interpreter.core.logger import setup_logger
from ontology_interpreter.core.models import OntologySummary
from ontology_interpreter.core.prefix import UriSelector, first_candidate

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_INVALID = 2
EXIT_FAILED = 3
EXIT_CONFIG = 4


def prompt_for_uri(candidates: Set[str]) -> str:
    """Ask the user on stdin to pick one of the candidate namespaces."""
    options = sorted(candidates)
    print("The ontology file doesn't specify the empty URI prefix.")
    print("Please choose which URI to associate with this ontology:")
    for i, uri in enumerate(options, 1):
        print(f"  [{i}] {uri}")

    while True:
        answer = input(f"Select 1-{len(options)}: ").strip()
        if answer.isdigit() and 1 <= int(answer) <= len(options):
            return options[int(answer) - 1]
        if answer in candidates:
            return answer
        print(f"Invalid choice: {answer}")


def _print_hierarchy(instance_type: InstanceType, depth: int = 0, seen: Optional[Set[str]] = None):
    seen = seen if seen is not None else set()
    marker = " (*)" if instance_type.iri in seen else ""
    print(f"  {'  ' * depth}{instance_type.name} [{len(instance_type.instances)}]{marker}")
    if marker:
        return
    seen.add(instance_type.iri)
    for subtype in sorted(instance_type.subtypes, key=lambda t: t.name):
        _print_hierarchy(subtype, depth + 1, seen)


def print_summary(ontology: Ontology, warnings: List[str]):
    print("=" * 60)
    print(f"Ontology: {ontology.name}")
    print(f"URI prefix: {ontology.iri}")
    print("=" * 60)
    print(f"Instance types: {len(ontology.types)}")
    print(f"Value types:    {len(ontology.value_types)}")
    print(f"Relation types: {len(ontology.relation_types)}")
    print(f"Instances:      {ontology.number_of_instances}")
    print(f"Relations:      {ontology.number_of_relations}")
    print()
    print("Type hierarchy:")
    if ontology.root is not None:
        _print_hierarchy(ontology.root)

    if warnings:
        print()
        print("Warnings:")
        for warning in warnings:
            print(f"  WARNING: {warning}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Interpret an RDF/OWL ontology file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument("path", help="RDF/OWL file to interpret")
    parser.add_argument(
        "--workers", "-w",
        type=int,
        default=None,
        help="Number of instance-building workers (default: derived from CPU count)"
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Config file path (default: packaged config.yaml)"
    )
    parser.add_argument(
        "--select",
        choices=["first", "prompt"],
        default=None,
        help="How to choose a namespace when the file declares no default prefix"
    )
    parser.add_argument("--json", action="store_true", help="Print the summary as JSON")

    args = parser.parse_args(argv)

    try:
        config = ConfigLoader(args.config)
        set_config(config)
        settings = config.get_interpreter_settings()
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_CONFIG

    if args.workers is not None:
        if args.workers < 1:
            parser.error("--workers must be at least 1")
        settings = settings.model_copy(update={"max_workers": args.workers})

    # Logs go to stderr so --json output stays parseable
    logging_config = config.get_logging_config()
    logger = setup_logger(
        level=logging_config["level"],
        log_file=logging_config["file"],
        format_string=logging_config["format"],
        stream=sys.stderr
    )
    selection = args.select or settings.default_selection
    select_uri: UriSelector = prompt_for_uri if selection == "prompt" else first_candidate

    interpreter = RDFInterpreterFactory(settings).get_interpreter(args.path, select_uri)
    try:
        ontology = interpreter.build_ontology()
    except OntologyFileNotFoundError as e:
        logger.error(str(e))
        return EXIT_NOT_FOUND
    except OntologyFileError as e:
        logger.error(str(e))
        return EXIT_INVALID
    except InterpreterError as e:
        logger.error(f"Interpretation failed: {e}")
        return EXIT_FAILED

    if args.json:
        summary = OntologySummary.from_ontology(ontology, interpreter.warnings)
        print(json.dumps(summary.model_dump(), indent=2))
    else:
        print_summary(ontology, interpreter.warnings)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
