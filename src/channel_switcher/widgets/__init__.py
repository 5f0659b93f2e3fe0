"""Widget classes for the channel switcher UI."""

from channel_switcher.widgets.picker import (
    ChannelPicker,
    populate_results,
    render_candidate_option,
)

__all__ = [
    "ChannelPicker",
    "populate_results",
    "render_candidate_option",
]
