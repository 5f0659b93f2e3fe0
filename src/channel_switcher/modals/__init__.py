"""Modal screens for the channel switcher.

Import modals from this package: ``from channel_switcher.modals import QuickSwitcherModal``
"""

from channel_switcher.modals.quick_switcher import QuickSwitcherModal

__all__ = ["QuickSwitcherModal"]
