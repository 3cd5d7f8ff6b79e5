#!/usr/bin/env python3
"""Helper script to check the .env file and the storage backend configuration."""

from pathlib import Path
import os
import sys

TEMPLATE = """# Storage backends: csv|supabase for reference data, file|supabase for simulation runs
DSIM_REFERENCE_BACKEND=csv
DSIM_SIMULATION_BACKEND=file

# Supabase Configuration (required when either backend is supabase)
# Get these from: https://supabase.com/dashboard -> Your Project -> Settings -> API
DSIM_SUPABASE_URL=https://your-project-id.supabase.co
DSIM_SUPABASE_KEY=your-service-role-key-here

# API Configuration
DSIM_API_PREFIX=/api
# DSIM_FRONTEND_ALLOWED_ORIGINS - JSON array or comma-separated list

# Seed data
DSIM_DATA_ROOT=./data
DSIM_DRIVERS_FILE=./data/drivers.csv
DSIM_ROUTES_FILE=./data/routes.csv
DSIM_ORDERS_FILE=./data/orders.csv
"""


def _mask(value: str) -> str:
    return value[:20] + "..." + value[-10:] if len(value) > 30 else value


def main():
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Delivery Simulation environment checker")
    print("=" * 60)
    print()

    if not env_file.exists():
        env_file.write_text(TEMPLATE, encoding="utf-8")
        print(f"Created template .env file at: {env_file}")
        print("Edit it and set DSIM_SUPABASE_URL / DSIM_SUPABASE_KEY if you use the supabase backends.")
        return

    print(f"Found .env file at: {env_file}")
    for line in env_file.read_text(encoding="utf-8").splitlines():
        if line.startswith("DSIM_SUPABASE_KEY="):
            name, value = line.split("=", 1)
            print(f"  {name}={_mask(value.strip())}")
        elif line and not line.startswith("#"):
            print(f"  {line}")
    print()

    for name in ("DSIM_SUPABASE_URL", "DSIM_SUPABASE_KEY"):
        status = "set" if os.getenv(name) else "not set"
        print(f"{name} in process environment: {status}")
    print()

    try:
        sys.path.insert(0, str(project_root / "src"))
        from delivery_sim.config import settings
    except Exception as e:
        print(f"Error loading config: {e}")
        print("Make sure you're running this from the project root directory")
        return

    print(f"Reference backend:  {settings.reference_backend}")
    print(f"Simulation backend: {settings.simulation_backend}")
    needs_supabase = "supabase" in (settings.reference_backend, settings.simulation_backend)
    if needs_supabase and not (settings.supabase_url and settings.supabase_key):
        print("ERROR: a supabase backend is selected but DSIM_SUPABASE_URL / DSIM_SUPABASE_KEY are missing")
    else:
        print("Configuration looks complete.")

    if settings.reference_backend != "csv":
        return
    for label, path in (
        ("drivers", settings.drivers_file),
        ("routes", settings.routes_file),
        ("orders", settings.orders_file),
    ):
        print(f"  {label} file: {path} ({'found' if path.exists() else 'MISSING'})")


if __name__ == "__main__":
    main()
