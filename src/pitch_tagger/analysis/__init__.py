"""
Project: PitchTagger
Author: Xingnan Zhu
File Name: __init__.py
Description:
    Per-player aggregates over tagged actions.
"""

from pitch_tagger.analysis.summary import PlayerSummary, connections, summarize_player

__all__ = ["PlayerSummary", "connections", "summarize_player"]
