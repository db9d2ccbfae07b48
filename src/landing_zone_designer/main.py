#!/usr/bin/env python
"""
Main entry point for the Landing Zone Designer.

Reads a cloud-infrastructure requirement order and writes the landing-zone design
together with its Terraform, CI/CD, policy, cost and diagram artifacts.
"""

import os

from dotenv import load_dotenv

from landing_zone_designer.log_config import configure_logging
from landing_zone_designer.orchestrator import OUTPUT_DIR, run_export

load_dotenv()


def kickoff():
    """Run the landing-zone export."""
    configure_logging(os.getenv("LOG_LEVEL", ""))

    # Get input file from environment or use default
    input_file = os.getenv("INPUT_FILE", "inputs/sample_order.json")
    output_dir = os.getenv("OUTPUT_DIR", OUTPUT_DIR)

    run_export(input_file, output_dir)


if __name__ == "__main__":
    kickoff()
