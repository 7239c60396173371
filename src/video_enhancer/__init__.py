"""video-enhancer: color, detail and speed adjustments for video files.

The core decides per stream whether ffmpeg can copy it or must re-encode
it, maps 0-100 controls to ffmpeg filter parameters and builds the filter
graphs; the CLI, probing and process handling sit around it.
"""

__version__ = "0.3.0"
