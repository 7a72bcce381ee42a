# Tone ramps, ordered densest glyph first and blank last

# Full and shaded blocks, then ASCII by decreasing ink coverage (15 glyphs)
DEFAULT_RAMP = "█▓@#%*+=~-:;,. "

# Block elements: U+2588 full block, U+2593-U+2591 shades, then blank
BLOCKS = "█▓▒░ "

# Plain ASCII for terminals without block glyphs
ASCII = "@%#*+=-:. "

RAMPS = {
    "default": DEFAULT_RAMP,
    "blocks": BLOCKS,
    "ascii": ASCII,
}
