"""
Command line checker for fair-exchange circuit inputs.

Usage:
    fairswap-check input.json [--public H0 H1] [--info] [--json] [-v]

Exit codes: 0 satisfied, 1 unsatisfied, 2 invalid input.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .errors import ValidationError
from .zkp import CircuitStatus, FairExchangeCircuit, FairExchangeInputs, PublicInputs

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fairswap-check",
        description="Evaluate the fair-exchange circuit over a circom-style input.json",
    )
    parser.add_argument("input", type=Path, help="Path to input.json")
    parser.add_argument(
        "--public",
        nargs=2,
        metavar=("H0", "H1"),
        help="Verifier-side public inputs Hpub[0] Hpub[1]",
    )
    parser.add_argument("--info", action="store_true", help="Print circuit information")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    circuit = FairExchangeCircuit()
    if args.info:
        print(json.dumps(circuit.get_circuit_info(), indent=2))

    try:
        inputs = FairExchangeInputs.from_json(args.input.read_text())
        public_inputs = None
        if args.public:
            public_inputs = PublicInputs()
            for name, value in zip(circuit.config.public_input_names, args.public):
                public_inputs.add_input(name, int(value, 0))
    except (OSError, ValueError, ValidationError) as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2

    result = circuit.evaluate(inputs, public_inputs)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(f"status: {result.status.name.lower()}")
        for check in result.failed_constraints:
            print(f"  constraint failed: {check.constraint_id} ({check.description})")
        for check in result.failed_sanity_checks:
            print(f"  witness sanity failed (not verifier-enforced): {check.constraint_id}")
        if result.error_message:
            print(f"  error: {result.error_message}")

    if result.status == CircuitStatus.INVALID_INPUT:
        return 2
    return 0 if result.is_satisfied else 1


if __name__ == "__main__":
    sys.exit(main())
