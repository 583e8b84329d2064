"""Common literal values used across docsite.

These constants keep signal names, placeholders, and built-in UI strings
centralized so the loader, the theme, and tests import the same values without
drifting.

Examples
--------
>>> from docsite import _constants
>>> _constants.VERSION_PLACEHOLDER
'dev'
>>> _constants.DEFAULT_SEARCH_TRANSLATIONS["button.buttonText"]
'Search'
"""

VERSION_SIGNAL = "version"
VERSION_PLACEHOLDER = "dev"
VERSION_ENV_VAR = "DOCSITE_VERSION"

DEFAULT_SEARCH_TRANSLATIONS: dict[str, str] = {
    "button.buttonText": "Search",
    "button.buttonAriaLabel": "Search",
    "modal.displayDetails": "Display detailed list",
    "modal.resetButtonTitle": "Reset search",
    "modal.backButtonTitle": "Close search",
    "modal.noResultsText": "No results for",
    "modal.footer.selectText": "to select",
    "modal.footer.selectKeyAriaLabel": "enter",
    "modal.footer.navigateText": "to navigate",
    "modal.footer.navigateUpKeyAriaLabel": "up arrow",
    "modal.footer.navigateDownKeyAriaLabel": "down arrow",
    "modal.footer.closeText": "to close",
    "modal.footer.closeKeyAriaLabel": "escape",
}
