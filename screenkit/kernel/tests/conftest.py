"""
Screenkit kernel test configuration.

Shared document fixtures. Everything here returns fresh objects per test so
no test can leak mutations into another.
"""

import copy

import pytest

from screenkit.kernel.models import parse_screen

MODULE_NOT_ENABLED = {
    "id": "module_not_enabled_example",
    "version": 1,
    "layout": "split-left-text-right-media",
    "theme": {"colorScheme": "light", "background": "surface", "accent": "primary"},
    "sections": [
        {
            "id": "hero_left",
            "type": "hero",
            "width": "1/2",
            "align": "left",
            "padding": "md",
            "margin": "none",
            "blocks": [
                {
                    "id": "eyebrow",
                    "variant": "eyebrow",
                    "text": "MEASURE / EXPERIMENTS",
                    "style": {"color": "muted", "spacingBottom": "xs"},
                },
                {
                    "id": "headline",
                    "variant": "heading1",
                    "text": "This module isn't enabled on your account yet",
                },
                {
                    "id": "body",
                    "variant": "body1",
                    "text": "Please contact your account manager if you'd like to activate it.",
                    "style": {"color": "muted", "spacingTop": "sm"},
                },
            ],
            "ctas": [
                {
                    "id": "contact_am",
                    "label": "Talk to Account Management",
                    "kind": "button",
                    "priority": "primary",
                    "size": "md",
                    "action": {"type": "mailto", "email": "am@example.com", "subject": "Enable Experiments"},
                }
            ],
        },
        {
            "id": "hero_image",
            "type": "image",
            "width": "1/2",
            "align": "center",
            "padding": "md",
            "margin": "none",
            "src": "https://via.placeholder.com/400x260.png?text=Hero+image",
            "alt": "Module not enabled",
        },
    ],
    "ctas": [],
}


@pytest.fixture
def screen_dict():
    """Wire form of the 'module not enabled' example screen."""
    return copy.deepcopy(MODULE_NOT_ENABLED)


@pytest.fixture
def screen(screen_dict):
    return parse_screen(screen_dict)
