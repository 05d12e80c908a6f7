"""
Configuration and constants for drug name formatting.

Feature flags are read from the environment once at import time; the fuzzy
constants define the suggestion threshold ``max(FUZZY_MIN_DISTANCE,
floor(FUZZY_DISTANCE_RATIO * len(key)))``.
"""

import os


# Environment variables and feature flags
ENABLE_UNKNOWN_DETECTION = os.getenv("ENABLE_UNKNOWN_DETECTION", "true").lower() == "true"
ENABLE_FUZZY_SUGGESTIONS = os.getenv("ENABLE_FUZZY_SUGGESTIONS", "true").lower() == "true"

# Constants
FUZZY_MAX_LENGTH_DELTA = 3
FUZZY_MIN_DISTANCE = 2
FUZZY_DISTANCE_RATIO = 0.7
