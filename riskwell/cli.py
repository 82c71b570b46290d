"""
Command-line interface for Riskwell.

Provides commands for scoring applicants, quoting premiums, issuing
policies, screening claims for fraud and inspecting configuration. Input
files are YAML; results are printed to stdout as JSON.
"""

import json
import sys
from decimal import Decimal, InvalidOperation
from typing import Any

import click
import yaml
from pydantic import ValidationError

from riskwell.config import (
    ConfigurationError,
    UnderwritingConfig,
    load_config,
    validate_config,
)
from riskwell.core.claim_lifecycle import TRANSITIONS, allowed_transitions
from riskwell.core.clock import Clock, SystemClock
from riskwell.core.fraud import FraudHeuristics
from riskwell.core.id_generator import IDGenerator
from riskwell.core.policy_lifecycle import PolicyUnderwriter
from riskwell.core.premium import PremiumCalculator
from riskwell.core.risk_scoring import RiskScoringEngine
from riskwell.domain.claim import Claim
from riskwell.domain.enums import ClaimStatus, PolicyType, PremiumFrequency
from riskwell.domain.policy import Policy, PolicyRequest
from riskwell.domain.risk_profile import RiskProfileInput
from riskwell.exceptions import UnderwritingError
from riskwell.utils.logging import configure_logging


def _read_yaml(path: str) -> dict[str, Any]:
    with open(path) as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise click.BadParameter(f"{path} must contain a YAML mapping")
    return data


def _parse_amount(ctx, param, value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise click.BadParameter(f"{value!r} is not a number") from None
    if amount <= 0:
        raise click.BadParameter("must be greater than zero")
    return amount


def _load_config(ctx) -> UnderwritingConfig:
    """Load configuration and apply its logging section unless flags override it."""
    try:
        config = load_config(ctx.obj.get("config_path"))
    except ValidationError as e:
        click.echo(f"Error: Invalid configuration: {e}", err=True)
        sys.exit(1)

    configure_logging(
        level="DEBUG" if ctx.obj["verbose"] else config.logging.level,
        json_output=ctx.obj["json_logs"] or config.logging.json_output,
    )
    return config


def _id_generator(config: UnderwritingConfig, clock: Clock) -> IDGenerator:
    """Seeded from the configuration, numbered for the current year."""
    return IDGenerator.from_seed(config.seed, prefix_year=clock.today().year)


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.group()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to configuration file",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.option(
    "--json-logs",
    is_flag=True,
    help="Output logs as JSON",
)
@click.pass_context
def main(ctx, config, verbose, json_logs):
    """Riskwell insurance underwriting toolkit."""
    ctx.ensure_object(dict)

    log_level = "DEBUG" if verbose else "INFO"
    configure_logging(level=log_level, json_output=json_logs)

    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose
    ctx.obj["json_logs"] = json_logs


@main.command()
@click.argument("profile", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--analysis",
    is_flag=True,
    help="Print the category breakdown and recommendations instead",
)
@click.option("--applicant-id", default="cli", help="Applicant identifier for the analysis")
@click.pass_context
def score(ctx, profile, analysis, applicant_id):
    """Score the applicant described in PROFILE.

    \b
    riskwell score applicant.yaml
    riskwell score applicant.yaml --analysis
    """
    try:
        config = _load_config(ctx)
        engine = RiskScoringEngine(config.risk, clock=SystemClock())
        profile_input = RiskProfileInput.model_validate(_read_yaml(profile))

        if analysis:
            stored = engine.assess_profile(applicant_id, profile_input)
            click.echo(engine.analyze(stored).model_dump_json(indent=2))
        else:
            click.echo(engine.score(profile_input).model_dump_json(indent=2))

    except UnderwritingError as e:
        _fail(str(e))
    except ValidationError as e:
        _fail(f"Invalid profile: {e}")


@main.command()
@click.argument("profile", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--policy-type", "-t",
    type=click.Choice([t.value for t in PolicyType], case_sensitive=False),
    required=True,
    help="Type of policy to quote",
)
@click.option(
    "--coverage",
    required=True,
    callback=_parse_amount,
    help="Coverage amount",
)
@click.option("--frequency", "-f", default="monthly", show_default=True, help="Premium frequency")
@click.option(
    "--start-date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="First installment due date (format: YYYY-MM-DD, default: today)",
)
@click.pass_context
def quote(ctx, profile, policy_type, coverage, frequency, start_date):
    """Quote a premium for the applicant described in PROFILE."""
    try:
        config = _load_config(ctx)
        clock = SystemClock()
        engine = RiskScoringEngine(config.risk, clock=clock)
        calculator = PremiumCalculator(config.premium, clock=clock)

        assessment = engine.score(RiskProfileInput.model_validate(_read_yaml(profile)))
        result = calculator.quote(
            assessment,
            policy_type,
            coverage,
            frequency=frequency,
            start_date=start_date.date() if start_date else None,
        )
        click.echo(result.model_dump_json(indent=2))

    except UnderwritingError as e:
        _fail(str(e))
    except ValidationError as e:
        _fail(f"Invalid profile: {e}")


@main.command()
@click.argument("profile", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--policy-type", "-t",
    type=click.Choice([t.value for t in PolicyType], case_sensitive=False),
    required=True,
    help="Type of policy to issue",
)
@click.option(
    "--coverage",
    required=True,
    callback=_parse_amount,
    help="Coverage amount",
)
@click.option(
    "--frequency", "-f",
    type=click.Choice([f.value for f in PremiumFrequency]),
    default=PremiumFrequency.MONTHLY.value,
    show_default=True,
    help="Premium frequency",
)
@click.option(
    "--term",
    type=click.IntRange(min=1),
    default=12,
    show_default=True,
    help="Term in months",
)
@click.option(
    "--start-date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Policy start date (format: YYYY-MM-DD, default: today)",
)
@click.option("--applicant-id", default="cli", help="Applicant identifier")
@click.pass_context
def issue(ctx, profile, policy_type, coverage, frequency, term, start_date, applicant_id):
    """Issue a policy for the applicant described in PROFILE.

    Policy ids and numbers come from the configured seed, so a fixed
    `seed` reproduces them.

    \b
    riskwell issue applicant.yaml -t life --coverage 250000
    RISKWELL_SEED=7 riskwell issue applicant.yaml -t health --coverage 50000 -f quarterly
    """
    try:
        config = _load_config(ctx)
        clock = SystemClock()
        engine = RiskScoringEngine(config.risk, clock=clock)
        underwriter = PolicyUnderwriter(
            scoring_engine=engine,
            calculator=PremiumCalculator(config.premium, clock=clock),
            id_generator=_id_generator(config, clock),
            clock=clock,
        )

        stored = engine.assess_profile(
            applicant_id, RiskProfileInput.model_validate(_read_yaml(profile))
        )
        request = PolicyRequest(
            policy_type=policy_type,
            coverage_amount=coverage,
            frequency=frequency,
            term_length=term,
            start_date=start_date.date() if start_date else None,
        )
        click.echo(underwriter.issue(stored, request).model_dump_json(indent=2))

    except UnderwritingError as e:
        _fail(str(e))
    except ValidationError as e:
        _fail(f"Invalid profile: {e}")


@main.command()
@click.argument("case", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def fraud(ctx, case):
    """Screen a claim for fraud indicators.

    CASE is a YAML file with `claim`, `policy` and optional `history`
    (the claimant's other claims).
    """
    try:
        config = _load_config(ctx)
        data = _read_yaml(case)
        claim = Claim.model_validate(data["claim"])
        policy = Policy.model_validate(data["policy"])
        history = [Claim.model_validate(c) for c in data.get("history") or []]

        result = FraudHeuristics(config.fraud).assess(claim, policy, history)
        click.echo(result.model_dump_json(indent=2))

    except KeyError as e:
        _fail(f"Case file is missing {e}")
    except ValidationError as e:
        _fail(f"Invalid case: {e}")


@main.command()
@click.argument(
    "status",
    required=False,
    type=click.Choice([s.value for s in ClaimStatus]),
)
def transitions(status):
    """Show allowed claim status transitions, for one STATUS or all."""
    if status:
        current = ClaimStatus(status)
        table = {current: allowed_transitions(current)}
    else:
        table = dict(TRANSITIONS)

    click.echo(
        json.dumps(
            {
                s.value: sorted(t.value for t in targets)
                for s, targets in table.items()
            },
            indent=2,
        )
    )


@main.command("validate-config")
@click.pass_context
def validate_config_cmd(ctx):
    """Validate the configuration file."""
    try:
        config = _load_config(ctx)
        warnings = validate_config(config)

        click.echo("Configuration is valid.")

        if warnings:
            click.echo("\nWarnings:")
            for warning in warnings:
                click.echo(f"  - {warning}")

    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
