"""
Preference storage backends for ClipJoint.

The Redis backend lives in ``clipjoint.database.redis_store`` and is imported
on demand.
"""

from clipjoint.database.preferences import (
    JsonFilePreferenceStore,
    MemoryPreferenceStore,
    PreferenceStore,
    UserDefaultsStore,
)

__all__ = [
    'PreferenceStore',
    'MemoryPreferenceStore',
    'JsonFilePreferenceStore',
    'UserDefaultsStore',
]
