"""
Charge Defaults

Values applied when a charge row leaves a field unset.
Last updated: 2026-10-19
"""

IS_ACTIVE = True              # New charges take part in evaluation
APPLY_BEFORE_PCT = True       # Non-percentage charges feed the percentage base
WEIGHT_SOURCE = "ACTUAL"      # Transported weight, RANGE matching

PERCENT_DIVISOR = 100         # PERCENTAGE values are stored as whole percents
