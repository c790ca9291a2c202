"""
PagePicker - User Interface

GTK4/libadwaita page picker.

Main Components:
- PagePickerApp: Application (Adw.Application)
- PickerWindow: Thumbnail grid, range entry and split action
- PageThumbnail: Individual page thumbnail widget
"""
