from clipjoint.models.clip import Clip, decode_clips, encode_clips

__all__ = ["Clip", "decode_clips", "encode_clips"]
