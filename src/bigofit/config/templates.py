"""Templates for generated bigofit configuration files."""

DEFAULT_CONFIG = """# bigofit configuration example
# Input sizes: powers | doubling | linear | dense | custom
strategy: "powers"
max_power: 5          # powers: 10, 100, ..., 10^max_power
start_size: 100       # doubling / linear / dense
steps: 5              # doubling
step_size: 1000       # linear
count: 5              # linear / dense
stop_size: 10000      # dense
# sizes: [10, 100, 1000]   # explicit list (implies strategy: custom)

# Workload handed to the function: "array" ([0..n-1]) or "number" (n itself)
input_mode: "array"

# Measurement
repetitions: 10
warmup_runs: 50
min_calibration_ms: 5.0
target_batch_ms: 15.0
max_calibration_calls: 1000000
aggregate: "mean"     # mean | median
verify_idempotent: false

# Classification
rmse_tolerance: 0.15
low_confidence_threshold: 75

# Outputs (null to disable)
json_path:
md_path:
"""

MINIMAL_CONFIG = """# bigofit minimal configuration
strategy: "doubling"
start_size: 1000
steps: 6
"""

CONFIG_PRESETS = {
    "full": DEFAULT_CONFIG,
    "minimal": MINIMAL_CONFIG,
}
