"""Prompt composition for welcome videos.

Two concerns live here:
  * turning a scene description plus a spoken line into one prompt
  * the aspect-ratio workaround: Veo only takes 16:9 for this workflow,
    so the requested ratio travels as a framing hint in the prompt text
"""

from __future__ import annotations

from welcome_reel.schemas.video import AspectRatio

# Ratio always sent to the provider
PROVIDER_ASPECT_RATIO = AspectRatio.LANDSCAPE

VERTICAL_FRAMING_HINT = (
    " Composition: keep the main subject centered inside the middle third of"
    " the frame, with generous empty margin on the left and right sides so the"
    " video can be cropped to a vertical format without cutting the subject."
)

SQUARE_FRAMING_HINT = (
    " Composition: keep the main subject centered with balanced space around"
    " it so the video can be cropped to a square or 4:3 format without"
    " cutting the subject."
)

_FRAMING_HINTS: dict[AspectRatio, str] = {
    AspectRatio.PORTRAIT: VERTICAL_FRAMING_HINT,
    AspectRatio.CLASSIC_PORTRAIT: VERTICAL_FRAMING_HINT,
    AspectRatio.SQUARE: SQUARE_FRAMING_HINT,
    AspectRatio.CLASSIC: SQUARE_FRAMING_HINT,
    AspectRatio.LANDSCAPE: "",
}

SPEECH_TEMPLATE = (
    '{scene} The character is saying: "{line}". '
    "He is welcoming the viewer enthusiastically."
)

DEFAULT_SCENE_PROMPT = (
    "A 3D animated character of a friendly accountant with glasses and black"
    " hair, wearing a light blue shirt. He is sitting at a modern desk in a"
    " dimly lit room with blue neon accents. In front of him is a transparent"
    " holographic tablet. Floating in the air are holographic charts, graphs,"
    ' and the text "PAQUETE PREMIUM". The character is looking directly at the'
    " camera with a welcoming smile and speaking with expressive gestures. The"
    " scene is cinematic and high-tech."
)
DEFAULT_SCRIPT_LINE = "Bienvenidos a Contador 4.0"


def compose_prompt(scene: str, line: str | None) -> str:
    """Merge the scene description with the line the character speaks.

    The template is always applied, even for an empty scene or line.
    """
    return SPEECH_TEMPLATE.format(scene=scene, line=line or "")


def framing_hint(aspect_ratio: AspectRatio | str) -> str:
    return _FRAMING_HINTS[AspectRatio(aspect_ratio)]


def apply_aspect_ratio_hint(prompt: str, aspect_ratio: AspectRatio | str) -> str:
    """Append the fixed framing hint for the requested ratio (none for 16:9)."""
    return prompt + framing_hint(aspect_ratio)
