#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Water Balance MCP Server

An STDIO MCP server for checking the ion balance of water-quality lab
reports. Given the major cations, major anions, total alkalinity and
conductivity with the unknown value(s) left blank, it solves the missing
value(s) from electroneutrality or from the conductivity reading.
"""

import os
import sys

from dotenv import load_dotenv

# Load environment variables before configuring logging
load_dotenv()

import logging
from typing import Any, Dict

from fastmcp import FastMCP

from balance_tools.core_config import CONFIG
from balance_tools.tool_impl import (
    calculate_water_balance_impl,
    get_equivalent_weights_impl,
    validate_water_sample_impl,
)

# Configure logging for MCP - CRITICAL for protocol integrity
# Use a file handler for detailed logs and a stderr handler for warnings/errors only
file_handler = logging.FileHandler(
    os.environ.get('WATER_BALANCE_LOG_FILE', CONFIG.DEFAULT_LOG_FILE)
)
file_handler.setLevel(logging.INFO)

stderr_handler = logging.StreamHandler(sys.stderr)
stderr_handler.setLevel(logging.WARNING)

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[file_handler, stderr_handler]
)
logger = logging.getLogger(__name__)

mcp = FastMCP("Water Balance Server")


@mcp.tool(
    description="""Check which calculation a water-quality lab report supports.

    Leave the unknown value(s) blank. Accepted patterns:
    - Exactly one ion or alkalinity value blank (solved by cation/anion balance)
    - All nine ions given, Conductivity blank (solved from the ion sums)
    - Conductivity given with one blank cation and no anions (cations only)
    - Conductivity given with one blank anion and no cations (anions only)
    - Conductivity given with one blank cation and one blank anion

    Example:
    {
      "Calcium": "",
      "Magnesium": 12, "Sodium": 23, "Potassium": 39,
      "Chloride": 35.5, "Fluoride": 19, "Nitrate": 14, "Sulfate": 48,
      "TotalAlkalinity": 50,
      "Conductivity": 250
    }

    Units: mg/L for ions, mg/L as CaCO3 for TotalAlkalinity, uS/cm for
    Conductivity. Optional "response_format": "json" (default) or "markdown".
    """
)
async def validate_water_sample(sample_input: Dict[str, Any]) -> Dict[str, Any]:
    """Classify a lab report without solving it."""
    return validate_water_sample_impl(sample_input)


@mcp.tool(
    description="""Solve the missing value(s) of a water-quality lab report.

    Uses the same input as validate_water_sample. Returns the cation and anion
    sums (meq/L), the solved property and value, and a status:
    - "Calculation Complete" (and mode-specific variants) on success
    - "Invalid Input" when the blank pattern is not supported or a value is negative
    - "Invalid Result" when the solved concentration would be negative
    - "Calculation Error" on an internal error

    Equivalent weights: Ca 20, Mg 12, Na 23, K 39, Cl 35.5, F 19, NO3 14,
    SO4 48, alkalinity 50. Conductivity factor: 100 uS/cm per meq/L.
    """
)
async def calculate_water_balance(sample_input: Dict[str, Any]) -> Dict[str, Any]:
    """Solve the unknown value(s) of a lab report."""
    return calculate_water_balance_impl(sample_input)


@mcp.tool(description="List the equivalent weights and conductivity factor used by the calculator.")
async def get_equivalent_weights() -> Dict[str, Any]:
    """Equivalent weight table."""
    return get_equivalent_weights_impl()


def main():
    """Run the MCP server."""
    logger.info("Starting Water Balance MCP Server...")
    logger.info("Available tools:")
    logger.info("  - validate_water_sample: classify a lab report into a calculation mode")
    logger.info("  - calculate_water_balance: solve the missing value(s)")
    logger.info("  - get_equivalent_weights: equivalent weight table")

    mcp.run()


if __name__ == "__main__":
    main()
