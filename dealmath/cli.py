"""Command line deal calculator: runs a strategy and prints a terminal report.

Usage:
    dealmath flip --price 200000 --arv 300000 --rehab 40000 --months 6
    dealmath brrrr --price 150000 --down 20 --rehab 30000 --rent 1800 --arv 230000
    dealmath rental --price 300000 --rent 2400 --down 25 --rate 7
"""

import argparse
import logging
import sys
from decimal import Decimal

from dealmath.config import settings
from dealmath.engine.brrrr import calculate_brrrr
from dealmath.engine.flip import calculate_flip_returns
from dealmath.engine.normalize import InputContractError
from dealmath.engine.rental import calculate_rental_returns
from dealmath.engine.report import (
    brrrr_key_metrics,
    brrrr_phase_lines,
    flip_lines,
    format_currency,
    rental_lines,
)
from dealmath.models.deal import BRRRRInputs, FlipInputs, RentalInputs
from dealmath.models.results import ValidationResult


# ── Helpers ──────────────────────────────────────────────────────────────────

def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


def _rows(rows: list[tuple[str, str]]) -> None:
    for label, value in rows:
        print(f"  {label + ':':<34} {value:>14}")


# ── Report sections ──────────────────────────────────────────────────────────

def print_validation(validation: ValidationResult) -> None:
    if not validation.errors and not validation.warnings:
        return
    _header("Checks")
    for error in validation.errors:
        print(f"  [ERROR]    {error}")
    for warning in validation.warnings:
        print(f"  [WARNING]  {warning}")


def run_flip(args: argparse.Namespace) -> None:
    result = calculate_flip_returns(FlipInputs(
        purchase_price=args.price,
        arv=args.arv,
        renovation_costs=args.rehab,
        holding_period_months=args.months,
        loan_type=args.loan_type,
        down_payment_percent=args.down,
        interest_rate=args.rate,
        points_percent=args.points,
    ))
    _header("Fix & Flip")
    _rows(flip_lines(result))
    print_validation(result.validation)


def run_brrrr(args: argparse.Namespace) -> None:
    result = calculate_brrrr(BRRRRInputs(
        purchase_price=args.price,
        down_payment_percent=args.down,
        renovation_costs=args.rehab,
        monthly_rent=args.rent,
        arv=args.arv,
        refinance_ltv=args.ltv,
        initial_interest_rate=args.rate,
        refinance_interest_rate=args.refi_rate,
        renovation_months=args.months,
    ))
    for title, rows in brrrr_phase_lines(result).items():
        _header(title)
        _rows(rows)

    _header("Summary")
    _rows(brrrr_key_metrics(result))
    print(f"\n  {result.summary.recommendation}")

    _header("Timeline")
    print(f"  {'Yr':>3}  {'Cash Flow':>12}  {'Cumulative':>12}  Description")
    print(f"  {'---':>3}  {'-' * 12}  {'-' * 12}  {'-' * 11}")
    for entry in result.timeline:
        print(
            f"  {entry.year:>3}  {format_currency(entry.cash_flow):>12}  "
            f"{format_currency(entry.cumulative_return):>12}  {entry.description}"
        )
    print_validation(result.validation)


def run_rental(args: argparse.Namespace) -> None:
    result = calculate_rental_returns(RentalInputs(
        purchase_price=args.price,
        strategy=args.strategy,
        units=args.units,
        rent_per_unit=args.rent,
        hoa_monthly=args.hoa,
        renovation_costs=args.rehab,
        hold_years=args.hold_years,
        down_payment_percent=args.down,
        interest_rate=args.rate,
        loan_term_years=args.term,
    ))
    _header("Rental")
    _rows(rental_lines(result))

    if result.projections:
        _header("Projections")
        print(f"  {'Yr':>3}  {'Gross Rent':>11}  {'NOI':>11}  {'Cash Flow':>11}  {'Equity':>11}")
        print(f"  {'---':>3}  {'-' * 11}  {'-' * 11}  {'-' * 11}  {'-' * 11}")
        for p in result.projections:
            print(
                f"  {p.year:>3}  {format_currency(p.gross_rent):>11}  "
                f"{format_currency(p.noi):>11}  {format_currency(p.cash_flow):>11}  "
                f"{format_currency(p.equity):>11}"
            )
    print_validation(result.validation)


# ── Main ─────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dealmath", description="Real estate deal return calculators"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    flip = sub.add_parser("flip", help="Fix & flip returns")
    flip.add_argument("--price", type=Decimal, required=True, help="Purchase price")
    flip.add_argument("--arv", type=Decimal, required=True, help="After repair value")
    flip.add_argument("--rehab", type=Decimal, default=Decimal("0"), help="Renovation budget")
    flip.add_argument("--months", type=int, default=6, help="Holding period in months")
    flip.add_argument(
        "--loan-type",
        choices=["hard_money", "conventional"],
        default="hard_money",
    )
    flip.add_argument("--down", type=Decimal, help="Down payment percent (e.g. 10)")
    flip.add_argument("--rate", type=Decimal, help="Interest rate percent (e.g. 10.45)")
    flip.add_argument("--points", type=Decimal, help="Lender points percent")
    flip.set_defaults(func=run_flip)

    brrrr = sub.add_parser("brrrr", help="BRRRR phase analysis")
    brrrr.add_argument("--price", type=Decimal, required=True, help="Purchase price")
    brrrr.add_argument("--down", type=Decimal, required=True, help="Down payment percent")
    brrrr.add_argument("--rehab", type=Decimal, required=True, help="Renovation budget")
    brrrr.add_argument("--rent", type=Decimal, required=True, help="Monthly rent")
    brrrr.add_argument("--arv", type=Decimal, required=True, help="After repair value")
    brrrr.add_argument("--ltv", type=Decimal, help="Refinance LTV as a fraction (default 0.75)")
    brrrr.add_argument("--rate", type=Decimal, help="Acquisition interest rate percent")
    brrrr.add_argument("--refi-rate", type=Decimal, help="Refinance interest rate percent")
    brrrr.add_argument("--months", type=int, help="Renovation months")
    brrrr.set_defaults(func=run_brrrr)

    rental = sub.add_parser("rental", help="Buy & hold rental returns")
    rental.add_argument("--price", type=Decimal, required=True, help="Purchase price")
    rental.add_argument("--rent", type=Decimal, required=True, help="Monthly rent per unit")
    rental.add_argument(
        "--strategy",
        default="rental",
        help="rental | buy-and-hold | house-hack | short-term-rental | commercial",
    )
    rental.add_argument("--units", type=int, default=1)
    rental.add_argument("--hoa", type=Decimal, default=Decimal("0"), help="Monthly HOA")
    rental.add_argument("--rehab", type=Decimal, default=Decimal("0"), help="Renovation budget")
    rental.add_argument("--hold-years", type=int, default=5)
    rental.add_argument("--down", type=Decimal, help="Down payment percent")
    rental.add_argument("--rate", type=Decimal, help="Interest rate percent")
    rental.add_argument("--term", type=int, help="Loan term in years")
    rental.set_defaults(func=run_rental)

    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=settings.log_level)
    args = build_parser().parse_args(argv)
    try:
        args.func(args)
    except InputContractError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
