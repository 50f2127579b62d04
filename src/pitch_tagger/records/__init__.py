"""
Project: PitchTagger
Author: Xingnan Zhu
File Name: __init__.py
Description:
    Record construction and storage serialisation.
"""

from pitch_tagger.records.builder import ActionDetails, build_record
from pitch_tagger.records.serialize import (
    record_from_dict,
    record_to_dict,
    shot_from_dict,
    shot_to_dict,
)

__all__ = ["build_record", "record_from_dict", "record_to_dict"]
