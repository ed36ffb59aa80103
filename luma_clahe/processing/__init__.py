# Processing package initialization
from .color import ChannelPlanes, rgb_to_ycbcr, ycbcr_to_rgb, from_interleaved, to_interleaved
from .tiling import TileDescriptor, TileGrid, clamp_grid_size, partition
from .histogram import ClippedHistogram, tile_histogram, clip_limit_for_area, clip_histogram
from .mapping import build_mapping_table, round_half_up
from .reconstruct import reconstruct, remap_luminance, tile_index_map
from .execution import ExecutionStrategy, SerialStrategy, ThreadPoolStrategy, ExecutionContext
from .clahe import (
    ClaheResult, ClaheEnhancer, outside_ui_ranges,
    enhance, enhance_with_details, enhance_interleaved, validate_clip_limit
)
from .resize import fit_within, fitted_size
