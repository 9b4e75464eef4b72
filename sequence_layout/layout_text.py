# sequence_layout/layout_text.py

from typing import Dict, List

from .sequence_layout_model import AnnotationBand, LayoutRow, LayoutSymbol, SequenceLayout


def band_tooltip(band: AnnotationBand) -> str:
    """
    "<label> (<start>-<end>) <strand>" + açıklama satırı.
    """
    return f"{band.label} ({band.start}-{band.end}) {band.strand}\n{band.description or ''}"


def symbol_tooltip(symbol: LayoutSymbol, bands_by_id: Dict[str, AnnotationBand]) -> str:
    lines: List[str] = [f"Position: {symbol.offset}, Base: {symbol.symbol}"]
    if symbol.annotation_ids:
        lines.append("Annotations:")
        for annotation_id in symbol.annotation_ids:
            band = bands_by_id.get(annotation_id)
            if band is not None:
                lines.append(f"- {band.label} ({band.type})")
    return "\n".join(lines)


def row_tooltips(row: LayoutRow) -> List[str]:
    """
    Satırdaki her sembol için tooltip metni.
    """
    bands_by_id = {band.annotation_id: band for band in row.bands}
    return [symbol_tooltip(symbol, bands_by_id) for symbol in row.symbols]


def render_text(layout: SequenceLayout) -> str:
    """
    Layout'un düz metin önizlemesi: her satır için konum + semboller,
    eşleşmeler küçük harf, altında şerit başına bir band satırı.
    """
    lines: List[str] = []
    width = len(str(max(layout.sequence_length - 1, 0)))

    for row in layout.rows:
        text = "".join(s.symbol.lower() if s.is_match else s.symbol for s in row.symbols)
        lines.append(f"{row.start_offset:>{width}} {text}")

        for lane in range(row.lane_count):
            cells = [" "] * len(row.symbols)
            for band in row.bands:
                if band.lane != lane:
                    continue
                marker = ">" if band.strand == "+" else "<"
                for col in range(band.relative_start, band.relative_end + 1):
                    cells[col] = "="
                cells[band.relative_end if band.strand == "+" else band.relative_start] = marker
            lines.append(f"{'':>{width}} {''.join(cells).rstrip()}")

    return "\n".join(lines)
