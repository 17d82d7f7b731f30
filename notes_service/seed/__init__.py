"""
Seed job for the notes table.
"""

from .seeder import SeedResult, generate_notes, run_seed, seed_database

__all__ = ["SeedResult", "generate_notes", "run_seed", "seed_database"]
