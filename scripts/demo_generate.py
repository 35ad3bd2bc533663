"""Demo script to run one welcome-video generation end to end.

Run with:
    GEMINI_API_KEY=... python3 scripts/demo_generate.py --ratio 9:16 --image face.png

This calls the real Veo API and waits until the job finishes, which can
take several minutes. The playable URL is printed at the end.
"""

import argparse
import asyncio
import base64
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "backend"))

from welcome_reel.schemas.video import AspectRatio  # noqa: E402
from welcome_reel.services.credential_gate import get_credential_gate  # noqa: E402
from welcome_reel.services.prompt_builder import (  # noqa: E402
    DEFAULT_SCENE_PROMPT,
    DEFAULT_SCRIPT_LINE,
    compose_prompt,
)
from welcome_reel.services.providers.veo_video import GenerationError  # noqa: E402
from welcome_reel.services.video_gen import generate_video  # noqa: E402


def _load_image(path: str | None) -> str | None:
    if not path:
        return None
    with open(path, "rb") as f:
        return base64.b64encode(f.read()).decode("utf-8")


async def main(args: argparse.Namespace) -> int:
    gate = get_credential_gate()
    if not await gate.has_credential():
        await gate.request_credential_selection()
        print("No API key available. Set GEMINI_API_KEY and try again.")
        return 1

    prompt = compose_prompt(args.prompt, args.line)
    print(f"--- Submitting ({args.ratio}) ---")
    print(prompt)

    try:
        url = await generate_video(prompt, _load_image(args.image), args.ratio)
    except GenerationError as e:
        print(f"Generation failed [{e.kind.value}]: {e}")
        return 1

    print("\n--- Video ready ---")
    print(url)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate a welcome video with Veo")
    parser.add_argument("--prompt", default=DEFAULT_SCENE_PROMPT)
    parser.add_argument("--line", default=DEFAULT_SCRIPT_LINE)
    parser.add_argument("--image", default=None, help="Optional reference image file")
    parser.add_argument(
        "--ratio",
        default=AspectRatio.LANDSCAPE.value,
        choices=[r.value for r in AspectRatio],
    )
    sys.exit(asyncio.run(main(parser.parse_args())))
