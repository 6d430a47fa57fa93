#!/usr/bin/env python3
"""
Quick CLI runner for the Market Analysis Extractor.

Usage:
    python run.py --backend mock                         # Demo with the canned report
    python run.py --product "Acme CRM" --location Kenya --backend openai
    python run.py --input saved_report.txt --product "Acme CRM"
    python run.py --json                                 # Print the result as JSON
    python run.py --mode api                             # Start FastAPI server
"""

import sys
import os
import argparse
import json
import logging

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("run")


def print_report(result, product_name: str, location: str):
    print("\n" + "=" * 70)
    print(f"  📊 MARKET ANALYSIS — {product_name} ({location})")
    print("=" * 70)
    print(f"  {result.summary()}")

    print("\n🏢 COMPETITORS")
    print("-" * 70)
    for c in result.competitors:
        print(f"  {c.name:<30} {c.headquarters:<22} {c.revenue}")
        print(f"      {c.description}")
    if not result.competitors:
        print("  None extracted.")

    print("\n💼 PRODUCT APPLICATIONS")
    print("-" * 70)
    for a in result.applications:
        print(f"  {a.name:<30} size={a.market_size:<14} growth={a.growth_rate}")
        print(f"      {a.description}")
    if not result.applications:
        print("  None extracted.")

    print("\n👥 CUSTOMER PERSONAS")
    print("-" * 70)
    for p in result.customer_personas:
        print(f"  {p.name}")
        print(f"      {p.description}")
        print(f"      Cares most about : {p.cares_most_about}")
        print(f"      Cares least about: {p.cares_least_about}")
        for customer in p.potential_customers:
            print(f"      → {customer}")

    if result.customer_personas:
        first = result.customer_personas[0]
        print("\n" + "─" * 70)
        print(f"  ✉️  SAMPLE EMAILS — {first.name}")
        print("─" * 70)
        print(first.sales_email)
        print("\n" + "·" * 70 + "\n")
        print(first.discovery_email)

    print("\n" + "=" * 70 + "\n")


def analyze(args):
    """Run one analysis (or parse a saved response) and print it."""
    from utils.errors import AnalysisError
    from utils.pipeline import parse_report, run_analysis

    try:
        if args.input:
            with open(args.input, encoding="utf-8") as fh:
                result = parse_report(fh.read(), args.product)
        else:
            result = run_analysis(args.product, args.location, backend=args.backend)
    except AnalysisError as e:
        print(f"\n❌ Analysis failed: {e.message}")
        sys.exit(1)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print_report(result, args.product, args.location)


def start_api():
    import uvicorn
    from config.settings import settings
    uvicorn.run(
        "api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=True,
    )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Market Analysis Extractor")
    parser.add_argument(
        "--mode",
        choices=["demo", "api"],
        default="demo",
        help="Run mode: demo | api",
    )
    parser.add_argument("--product", default="SmartInventory", help="Product name")
    parser.add_argument("--location", default="Germany", help="Target market")
    parser.add_argument("--backend", choices=["openai", "mock"], default=None,
                        help="Generation backend (default: settings.GENERATION_BACKEND)")
    parser.add_argument("--input", default=None,
                        help="Parse a saved report file instead of calling the service")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    args = parser.parse_args()

    if args.mode == "demo":
        analyze(args)
    elif args.mode == "api":
        start_api()
