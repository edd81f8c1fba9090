"""
Caption overlay rendered with the ffmpeg ``drawtext`` filter.
"""

import logging
import subprocess
import tempfile
from pathlib import Path
from typing import List

from ...application.ports.services.video_hosting_service import CaptionRenderer
from ...core.exceptions import VideoProcessingError
from ...core.utils import run_blocking

logger = logging.getLogger("docintro")


class FfmpegCaptionRenderer(CaptionRenderer):
    """Burn a bottom-centered caption into a video with ffmpeg."""

    def __init__(self, ffmpeg_path: str = "ffmpeg", font_size: int = 36):
        self.ffmpeg_path = ffmpeg_path
        self.font_size = font_size

    async def render_caption(self, source: Path, caption: str) -> Path:
        output = source.with_name(f"{source.stem}_captioned{source.suffix}")
        await run_blocking(self._render, source, caption, output)
        logger.info(f"Rendered caption onto {source.name} -> {output.name}")
        return output

    def _render(self, source: Path, caption: str, output: Path) -> None:
        # The caption goes through a text file so it needs no filter escaping
        with tempfile.NamedTemporaryFile("w", suffix=".txt", encoding="utf-8", delete=False) as f:
            f.write(caption)
            text_path = Path(f.name)
        try:
            self._run_ffmpeg(self.build_command(source, text_path, output))
        except OSError as e:
            output.unlink(missing_ok=True)
            raise VideoProcessingError(str(e)) from e
        except VideoProcessingError:
            output.unlink(missing_ok=True)
            raise
        finally:
            text_path.unlink(missing_ok=True)

    def build_command(self, source: Path, text_path: Path, output: Path) -> List[str]:
        drawtext = ":".join(
            [
                f"drawtext=textfile='{text_path.as_posix()}'",
                "fontcolor=white",
                f"fontsize={self.font_size}",
                "box=1",
                "boxcolor=black@0.5",
                "boxborderw=12",
                "x=(w-text_w)/2",
                "y=h-text_h-40",
            ]
        )
        return [
            self.ffmpeg_path,
            "-y",
            "-i",
            str(source),
            "-vf",
            drawtext,
            "-c:a",
            "copy",
            str(output),
        ]

    @staticmethod
    def _run_ffmpeg(cmd: List[str]) -> None:
        result = subprocess.run(cmd, capture_output=True, text=True)
        if result.returncode != 0:
            raise VideoProcessingError(
                f"exited with code {result.returncode}",
                {"stderr": result.stderr.strip()[-2000:]},
            )
