# src/pgmigrate/cli.py
"""Migration proposal CLI - size, price and schedule a PostgreSQL to Azure migration."""

import click
import json
import sys
from pathlib import Path
from typing import Any, Dict, Tuple
import structlog
import yaml
from pydantic import ValidationError

from pgmigrate.config.settings import Settings
from pgmigrate.core.exceptions import ConfigurationException, MigrationPlannerException
from pgmigrate.core.utils import format_currency, safe_get, setup_logging
from pgmigrate.estimation.proposal_engine import ProposalEngine
from pgmigrate.models.migration_models import ClientProfile, MigrationProposal, Urgency, WorkloadInput
from pgmigrate.pricing.catalog import PricingCatalog

logger = structlog.get_logger(__name__)

WORKLOAD_FIELDS = tuple(WorkloadInput.model_fields)
CLIENT_FIELDS = tuple(ClientProfile.model_fields)


def load_input_file(path: Path) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Read workload and client sections from a YAML or JSON file.

    The file may hold ``workload`` and ``client`` sections, or workload fields at the top level.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationException(f"Invalid input file {path}: {e}")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationException(f"Cannot read input file {path}: {e}")
    
    if not isinstance(data, dict):
        raise ConfigurationException(f"Input file {path} must contain a mapping")
    
    workload = safe_get(data, "workload")
    if workload is None:
        workload = {k: v for k, v in data.items() if k in WORKLOAD_FIELDS}
    client = safe_get(data, "client", {}) or {}
    
    if not isinstance(workload, dict) or not isinstance(client, dict):
        raise ConfigurationException(f"Input file {path} has malformed 'workload' or 'client' section")
    
    return dict(workload), {k: v for k, v in client.items() if k in CLIENT_FIELDS}


def render_text(proposal: MigrationProposal, currency: str = "USD") -> str:
    """Plain-text rendering of a proposal."""
    def money(amount: float) -> str:
        return format_currency(amount, currency)
    
    def delta(amount: float) -> str:
        # savings shown as a reduction, extra spend as an increase
        return f"-{money(amount)}" if amount > 0 else f"+{money(abs(amount))}"
    
    workload = proposal.workload
    rec = proposal.recommendation
    costs = proposal.costs
    provided = costs.current_cost_provided
    
    def current(amount: float) -> str:
        return money(amount) if provided else "Not provided"
    
    lines = [
        f"Migration Proposal for {proposal.client.company_name}",
        f"Generated on {proposal.generated_at:%B %d, %Y}",
        "",
        "Executive Summary",
        f"  {proposal.summary.headline}",
        "",
        "Current State",
        f"  Total database size: {workload.db_size_gb:g} GB",
        f"  Databases:           {workload.db_count}",
        f"  CPU / RAM:           {workload.cpu_cores} / {workload.ram_gb:g}GB",
        f"  Storage type:        {workload.storage_type.upper()}",
        "",
        f"Recommended Configuration ({proposal.region_name})",
        f"  Tier:             {rec.tier_name}",
        f"  vCores:           {rec.vcores}",
        f"  Memory:           {rec.allocated_ram_gb} GB",
        f"  Storage:          {rec.storage_gb} GB",
        f"  Backup retention: {rec.backup_retention_days} Days",
        f"  High availability: {'Enabled' if rec.ha_enabled else 'Disabled'}",
        "",
        "Cost Comparison",
        f"  {'':<24}{'Current':>16}{'Azure':>16}{'Difference':>16}",
        f"  {'Monthly Infrastructure':<24}{current(costs.current.monthly):>16}"
        f"{money(costs.azure.monthly):>16}{delta(costs.savings.monthly):>16}",
        f"  {'Annual Cost':<24}{current(costs.current.annual):>16}"
        f"{money(costs.azure.annual):>16}{delta(costs.savings.annual):>16}",
        f"  {'3-Year TCO':<24}{current(costs.current.three_year):>16}"
        f"{money(costs.azure.three_year):>16}{delta(costs.savings.three_year):>16}",
        f"  Cost reduction: {costs.savings.percentage:.1f}%",
        "",
        f"Migration Timeline ({proposal.timeline.total_weeks} weeks, ~{proposal.timeline.total_months} months)",
    ]
    for phase in proposal.timeline.phases:
        lines.append(f"  {phase.name}: Weeks {phase.start_week}-{phase.end_week} ({phase.weeks} weeks)")
        lines.append(f"    {phase.description}")
    
    return "\n".join(lines) + "\n"


@click.command()
@click.option('--input', '-i', 'input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='YAML or JSON file describing the workload (options below override it)')
@click.option('--db-size', type=float, help='Total database size in GB')
@click.option('--db-count', type=int, help='Number of databases')
@click.option('--cpu-cores', type=int, help='CPU cores of the current server')
@click.option('--ram-gb', type=float, help='RAM of the current server in GB')
@click.option('--storage-type', help='Current storage type (e.g. ssd, hdd, premium-ssd)')
@click.option('--avg-iops', type=int, help='Average IOPS')
@click.option('--current-cost', type=float, help='Current monthly cost (omit if unknown)')
@click.option('--region', help='Target Azure region (default from ESTIMATOR_DEFAULT_REGION)')
@click.option('--urgency', type=click.Choice([u.value for u in Urgency]), help='Migration urgency')
@click.option('--company', help='Company name shown on the proposal')
@click.option('--industry', help='Industry of the company')
@click.option('--pricing-file', type=click.Path(dir_okay=False, path_type=Path),
              help='YAML file overriding the built-in pricing snapshot')
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
              help='Write the proposal to this file instead of stdout')
@click.option('--format', '-f', 'output_format', type=click.Choice(['json', 'text']), default='text',
              help='Output format')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--debug', is_flag=True, help='Enable debug logging')
def propose(input_file, db_size, db_count, cpu_cores, ram_gb, storage_type, avg_iops, current_cost,
            region, urgency, company, industry, pricing_file, output, output_format, verbose, debug):
    """
    Generate a PostgreSQL to Azure Database for PostgreSQL migration proposal.
    
    Recommends a service tier and vCore count, compares the Azure cost with
    the current spend over 1 month, 1 year and 3 years, and lays out a phased
    migration timeline.
    
    Example:
        pgmigrate-propose --db-size 500 --cpu-cores 4 --ram-gb 32 --current-cost 2500 --region westeurope
    """
    settings = Settings.create_from_env()
    debug = debug or settings.debug
    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = settings.log_level.value
    setup_logging(log_level=log_level, json_logs=settings.json_logs)
    
    try:
        pricing_path = pricing_file or settings.estimator.pricing_file
        catalog = PricingCatalog.from_yaml(pricing_path) if pricing_path else PricingCatalog.default()
        
        workload_data, client_data = load_input_file(input_file) if input_file else ({}, {})
        workload_data.setdefault("region", settings.estimator.default_region)
        overrides = {
            "db_size_gb": db_size,
            "db_count": db_count,
            "cpu_cores": cpu_cores,
            "ram_gb": ram_gb,
            "storage_type": storage_type,
            "avg_iops": avg_iops,
            "current_monthly_cost": current_cost,
            "region": region,
            "urgency": urgency,
        }
        workload_data.update({k: v for k, v in overrides.items() if v is not None})
        client_data.update({k: v for k, v in {"company_name": company, "industry": industry}.items() if v is not None})
        
        workload = WorkloadInput(**workload_data)
        client = ClientProfile(**client_data)
        
        if verbose:
            click.echo(f"📋 Pricing source: {catalog.source}", err=True)
            click.echo(f"📍 Region: {workload.region} (x{catalog.region_multiplier(workload.region)})", err=True)
        
        engine = ProposalEngine(catalog, currency=settings.estimator.currency)
        proposal = engine.generate(workload, client)
        
    except ValidationError as e:
        click.echo(f"❌ Error: Invalid workload description:\n{e}", err=True)
        sys.exit(1)
    except MigrationPlannerException as e:
        click.echo(f"❌ Error: {e.message}", err=True)
        if debug and e.details:
            click.echo(json.dumps(e.details, indent=2, default=str), err=True)
        sys.exit(1)
    
    if output_format == 'json':
        content = json.dumps(engine.export_proposal_to_dict(proposal), indent=2, default=str) + "\n"
    else:
        content = render_text(proposal, settings.estimator.currency)
    
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(content)
        click.echo(f"✅ Proposal saved to: {output}")
    else:
        click.echo(content, nl=False)


if __name__ == '__main__':
    propose()
