# src/patcher/controllers/patch_controller.py
import logging
from pathlib import Path
from typing import Optional, Union

from auditor.model import FileFormat, SourceDocument
from frontscan.core.utils.file_utils import read_document
from frontscan.model import PatcherSettings
from patcher.model import Patch, PatchContext, PatchStrategy, TransformResult
from patcher.services.diff_service import build_unified_diff
from patcher.services.pattern_transform_service import PatternTransform
from patcher.services.structural_transform_service import (
    ComponentStructuralTransform,
    MarkupStructuralTransform,
)

logger = logging.getLogger(__name__)


class PatchSynthesizer:
    """
    Produces corrective patches for a document.

    Markup and component sources try the structural transform first and fall
    back to the pattern transform when it changed nothing (already compliant,
    or the source could not be parsed). Stylesheets only have the pattern path.
    Patches are never cached.
    """

    def __init__(self, settings: Optional[PatcherSettings] = None):
        self.settings = settings or PatcherSettings()
        lang = self.settings.default_lang
        self.structural = {
            FileFormat.MARKUP: MarkupStructuralTransform(lang),
            FileFormat.COMPONENT: ComponentStructuralTransform(lang),
        }
        self.pattern = PatternTransform(lang)

    def synthesize(self, document: SourceDocument, context: Optional[PatchContext] = None) -> Patch:
        name = document.name
        strategy = PatchStrategy.PATTERN
        result: Optional[TransformResult] = None

        structural = self.structural.get(document.format)
        if structural is not None:
            result = structural.apply(document.content, name)
            if result.changed:
                strategy = PatchStrategy.STRUCTURAL
            else:
                logger.debug(f"No structural changes for {name}, using pattern transform")
                result = None

        if result is None:
            result = self.pattern.apply(document.content, document.format, name, context)

        return Patch(
            file_name=name,
            diff_text=build_unified_diff(document.content, result.modified, name),
            rationale=result.rationale,
            strategy=strategy,
            generated_content_added=result.generated_content is not None,
        )

    def preview_fix_for_file(self, path: Union[str, Path], context: Optional[PatchContext] = None) -> str:
        """
        Returns the rendered patch (rationale header plus unified diff) for a file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file type is not supported.
        """
        document = read_document(path)
        return self.synthesize(document, context).render()

    def apply_fix_for_file(self, path: Union[str, Path], context: Optional[PatchContext] = None) -> Path:
        """Writes the rendered patch next to the file as `<path>.patch` and returns that path."""
        rendered = self.preview_fix_for_file(path, context)
        out = Path(f"{path}.patch")
        out.write_text(rendered, encoding="utf-8")
        logger.info(f"Patch written to {out}")
        return out
