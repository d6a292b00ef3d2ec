"""Device picker keyboard handler."""

from spotify_tui.ui.blessed.state import ApplicationState

from .common import is_movement, item_at, navigate_list, submit_event


def handle_select_device_key(event: dict, app: ApplicationState) -> None:
    if is_movement(event):
        app.selected_device_index = navigate_list(
            event, app, app.devices, app.selected_device_index
        )
    elif submit_event(event, app):
        device = item_at(app.devices, app.selected_device_index)
        if device is None or not device.get("id"):
            return
        app.dispatch("transfer_playback_to_device", device_id=device["id"])
        app.pop_navigation_stack()
