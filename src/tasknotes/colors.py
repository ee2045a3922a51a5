# SPDX-License-Identifier: GPL-3.0-or-later

from tasknotes.note import DEFAULT_COLOR

# name: (light_bg, dark_bg); None keeps the theme background
NOTE_COLORS = {
    'default': (None, None),
    'yellow':  ('#FFF59D', '#4A4520'),
    'blue':    ('#BBDEFB', '#1A3A5C'),
    'green':   ('#C8E6C9', '#1B3D1E'),
    'pink':    ('#F8BBD0', '#4A1B30'),
    'purple':  ('#E1BEE7', '#3A1B4A'),
}

COLOR_NAMES = list(NOTE_COLORS.keys())


def normalize_color(name) -> str:
    return name if name in NOTE_COLORS else DEFAULT_COLOR


def get_css():
    """Generate CSS for all note colors with light/dark variants."""
    lines = []

    for name, (light_bg, dark_bg) in NOTE_COLORS.items():
        if light_bg is None:
            lines.append(f'''
.color-{name} {{
    background-color: @window_bg_color;
    border: 1px solid alpha(currentColor, 0.3);
}}''')
            continue
        lines.append(f'''
.note-color-{name},
.note-color-{name} text {{
    background-color: {light_bg};
}}
.color-{name} {{
    background-color: {light_bg};
}}

.dark .note-color-{name},
.dark .note-color-{name} text {{
    background-color: {dark_bg};
}}''')

    return '\n'.join(lines)
