from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # App
    debug: bool = False
    log_level: str = "INFO"

    # Carrying cost proxies. Whole-number percents: 1.2 means 1.2%.
    property_tax_rate_pct: Decimal = Decimal("1.2")  # Of purchase price, annual
    insurance_rate_pct: Decimal = Decimal("0.35")  # Of purchase price, annual
    maintenance_pct: Decimal = Decimal("10")  # Of gross rent
    management_pct: Decimal = Decimal("8")  # Of gross rent
    vacancy_pct: Decimal = Decimal("5")  # Of gross rent
    selling_costs_pct: Decimal = Decimal("8")  # Of ARV, realtor + closing
    brrrr_closing_costs_pct: Decimal = Decimal("3")  # Of purchase price
    total_closing_costs_pct: Decimal = Decimal("3")  # Lender points are part of this
    min_other_closing_costs_pct: Decimal = Decimal("0.5")

    # Flat monthly costs while the property is vacant for renovation
    monthly_utilities: Decimal = Decimal("200")
    monthly_upkeep: Decimal = Decimal("150")

    # Projections
    annual_rent_growth_pct: Decimal = Decimal("3")
    annual_appreciation_pct: Decimal = Decimal("3")

    # Lender policy ceiling for cash-out refinances (unit fraction).
    # Exceeding it is reported, never clamped.
    max_refinance_ltv: Decimal = Decimal("0.80")

    # Rehab location adjustment
    high_cost_rehab_states: list[str] = [
        "CA", "NY", "MA", "HI", "DC", "WA", "OR", "CT", "NJ",
    ]
    high_cost_rehab_multiplier: Decimal = Decimal("1.2")


settings = Settings()
