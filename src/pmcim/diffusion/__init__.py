from pmcim.diffusion.independent_cascade import (
    DiffusionResult,
    SpreadEstimate,
    estimate_spread,
    run_ic_diffusion,
)
