# Application settings

# --- CLAHE Parameters ---
CLAHE_DEFAULTS = {
    "clip_limit": 2.0,  # Multiplier on the average bin count
    "grid_size": 8,     # Tiles per axis (grid is grid_size x grid_size)
    "grid_min": 2,
    "grid_max": 64,
    "histogram_bins": 256,
}

# --- Caller Limits ---
# Bounds used by embedding applications; the core does not enforce them.
CALLER_LIMITS = {
    "max_dimension": 1200,            # Downscale larger inputs before enhancing
    "ui_clip_limit_range": (1.0, 4.0),
    "ui_grid_range": (4, 32),
}

# --- Execution ---
EXECUTION_DEFAULTS = {
    "parallel_min_pixels": 512 * 512,  # Auto mode switches to a thread pool at this size
    "max_workers": None,               # None -> os.cpu_count()
    "row_band_height": 64,             # Rows per reconstruct work item
}

# --- Logging ---
LOGGING_LEVEL = "INFO" # Options: DEBUG, INFO, WARNING, ERROR
