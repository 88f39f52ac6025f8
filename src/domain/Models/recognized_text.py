# src/domain/Models/recognized_text.py
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

DEFAULT_CONFIDENCE = 1.0


def _confidence_or_default(value: Optional[float]) -> float:
    # Un fragmento sin confianza propia cuenta como confianza total.
    if value is None:
        return DEFAULT_CONFIDENCE
    return float(value)


@dataclass(frozen=True)
class TextLine:
    text: str
    confidence: float = DEFAULT_CONFIDENCE

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "TextLine":
        return TextLine(
            text=data.get("text") or "",
            confidence=_confidence_or_default(data.get("confidence")),
        )


@dataclass(frozen=True)
class TextBlock:
    text: str
    confidence: float = DEFAULT_CONFIDENCE
    lines: Tuple[TextLine, ...] = ()

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "TextBlock":
        return TextBlock(
            text=data.get("text") or "",
            confidence=_confidence_or_default(data.get("confidence")),
            lines=tuple(TextLine.from_dict(line) for line in data.get("lines") or ()),
        )


@dataclass(frozen=True)
class RecognizedText:
    """
    Resultado jerárquico de un motor de reconocimiento de texto:
    texto completo + bloques, cada bloque con sus líneas.
    Se produce una sola vez por llamada de reconocimiento y no se modifica.
    """
    full_text: str
    blocks: Tuple[TextBlock, ...] = field(default_factory=tuple)

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "RecognizedText":
        """
        Construye el modelo desde un dict estilo ML Kit
        (`text`/`fullText`, `blocks[].lines[]`). Las confianzas ausentes
        valen 1.0.
        """
        full_text = data.get("full_text", data.get("fullText", data.get("text")))
        return RecognizedText(
            full_text=full_text or "",
            blocks=tuple(TextBlock.from_dict(b) for b in data.get("blocks") or ()),
        )
