"""
Hypothesis configuration for property-based testing.

This module configures Hypothesis settings for reproducible, performant,
and effective property-based testing of the lexer, parser and rewrites
in swift_refactor.
"""

import hypothesis
from hypothesis import HealthCheck, Phase, settings

# Configure Hypothesis globally for this test suite
hypothesis.settings.register_profile(
    "default",
    settings(
        database=None,  # Disable database to avoid state between runs
        print_blob=True,  # Print minimal examples when tests fail
        max_examples=100,
        deadline=None,  # Parsing large generated files can be slow
        phases=[
            Phase.explicit,
            Phase.reuse,
            Phase.generate,
            Phase.target,
            Phase.shrink,
        ],
        derandomize=True,
    ),
)

hypothesis.settings.register_profile(
    "ci",
    settings(
        max_examples=200,  # More examples in CI
        deadline=None,
        print_blob=True,
        derandomize=True,
        phases=[
            Phase.explicit,
            Phase.reuse,
            Phase.generate,
            Phase.target,
            Phase.shrink,
        ],
    ),
)

hypothesis.settings.register_profile(
    "fast",
    settings(
        max_examples=50,  # Fewer examples for quick feedback
        deadline=None,
        print_blob=True,
        derandomize=True,
        phases=[
            Phase.explicit,
            Phase.reuse,
            Phase.generate,
            Phase.shrink,  # Skip target phase for speed
        ],
    ),
)

# Set default profile
hypothesis.settings.load_profile("default")

# Common settings that can be imported by test modules
DEFAULT_SETTINGS = settings(
    max_examples=100,
    deadline=None,
    print_blob=True,
    derandomize=True,
    suppress_health_check=[HealthCheck.too_slow],
)

# Settings for whole-file rewrites, which parse the input several times
REWRITE_SETTINGS = settings(
    max_examples=50,
    deadline=None,
    print_blob=True,
    derandomize=True,
    suppress_health_check=[HealthCheck.too_slow],
)
