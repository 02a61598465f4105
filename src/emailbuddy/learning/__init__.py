"""
Learning -- the writing profile inferred from sample emails.

    from .learning import ProfileStore, build_profile_from_samples
"""

from .profile import ProfileStore, average_sentence_length, build_profile_from_samples
