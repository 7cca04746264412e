#!/usr/bin/env python3
"""Generate VK, proof and on-chain verifier calldata for a Noir program.

Usage:
    python gen_calldata.py --flavor starknet \
        --project-dir ./hello_world \
        --program hello_world \
        -i x=15 -i y=14

    python gen_calldata.py --config run.json

Writes <project>/target/vk, <project>/target/proof and
<project>/target/calldata.json. Exits non-zero on any unrecovered error.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

# Add this directory to the path so the primitives/protocol packages import
sys.path.insert(0, str(Path(__file__).resolve().parent))

from primitives.errors import CalldataError
from protocol.backends import BbBackend, GaragaCalldataGenerator, NargoExecutor
from protocol.config import PipelineConfig
from protocol.flavor import HonkFlavor
from protocol.pipeline import generate_calldata

logger = logging.getLogger("gen_calldata")


def parse_inputs(pairs: List[str]) -> Dict[str, str]:
    """Parse repeated name=value circuit inputs."""
    inputs = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"Circuit input must look like name=value, got {pair!r}")
        inputs[name.strip()] = value.strip()
    return inputs


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Prove a Noir program with UltraHonk and write verifier calldata."
    )
    parser.add_argument(
        "--flavor",
        type=HonkFlavor.parse,
        help="Proof flavor: keccak (0) or starknet (1). Required unless set in --config",
    )
    parser.add_argument("--config", help="JSON run configuration file")
    parser.add_argument("--project-dir", help="Noir project directory (default: .)")
    parser.add_argument("--program", help="Compiled program name (default: hello_world)")
    parser.add_argument("--target-dir", help="Output directory (default: target)")
    parser.add_argument(
        "-i", "--input",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Circuit input; repeat for each input (default: x=15 y=14)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def load_config(args: argparse.Namespace) -> PipelineConfig:
    """Merge the optional config file with command-line overrides."""
    if args.config:
        config = PipelineConfig.from_json(args.config, flavor=args.flavor)
    elif args.flavor is None:
        raise ValueError("--flavor is required (keccak or starknet)")
    else:
        config = PipelineConfig(flavor=args.flavor)

    if args.project_dir:
        config.project_dir = Path(args.project_dir)
    if args.program:
        config.program = args.program
    if args.target_dir:
        config.target_dir = Path(args.target_dir)
    if args.input:
        config.inputs = parse_inputs(args.input)
    return config


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args)
        logger.info("Flavor: %s (code %d)", config.flavor.name.lower(), int(config.flavor))
        result = generate_calldata(
            config,
            NargoExecutor(config.project_dir, config.program, config.nargo_bin, config.build_dir),
            BbBackend(config.bytecode_path, config.bb_bin),
            GaragaCalldataGenerator(config.garaga_bin),
        )
    except (CalldataError, ValueError, OSError) as e:
        logger.error("Error generating calldata: %s", e)
        return 1

    if result.calldata is None:
        logger.warning("VK and proof written; calldata was not generated")
    return 0


if __name__ == "__main__":
    sys.exit(main())
