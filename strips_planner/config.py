# Configuration for the STRIPS planner
# - All configurable fields are read from environment variables with safe fallbacks
# - Paths default to repository-relative locations for portability

import os
from pathlib import Path

# Project root (repo root assumed one level above this file: strips_planner/...)
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Default inputs
DATA_PATH = os.getenv("DATA_PATH", str(PROJECT_ROOT / "data"))
DOMAIN_PATH = os.getenv("DOMAIN_PATH", os.path.join(DATA_PATH, "blocksworld", "domain.pddl"))
PROBLEM_PATH = os.getenv("PROBLEM_PATH", os.path.join(DATA_PATH, "blocksworld", "problem.pddl"))

# Search bounds (0 = unbounded)
MAX_VISITED_STATES = int(os.getenv("MAX_VISITED_STATES", "0"))
MAX_FRONTIER_SIZE = int(os.getenv("MAX_FRONTIER_SIZE", "0"))
MAX_SEARCH_DEPTH = int(os.getenv("MAX_SEARCH_DEPTH", "0"))

# Output Configuration
OUTPUT_FORMAT = os.getenv("OUTPUT_FORMAT", "text")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Replay found plans through the simulator before reporting them
VALIDATE_PLAN = os.getenv("VALIDATE_PLAN", "1") == "1"
