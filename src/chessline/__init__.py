"""chessline — chess rules engine with a rewindable game timeline."""

__version__ = "0.1.0"
