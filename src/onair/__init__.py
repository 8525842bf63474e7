"""
OnAir - live channel HLS playlist synthesis.

Maps wall-clock time onto fixed-duration segment sequences, resolves which
scheduled program and which chunk of its stream is on air for each sequence,
and renders sliding-window HLS media playlists.
"""

__version__ = "0.1.0"
