# main.py

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional

from model.annotation_model import AnnotationStore
from model.sequence_data_model import SequenceDataModel
from navigation_model.navigation_model import NavigationModel
from repositories.base_repository import AbstractSequenceRepository
from repositories.repository_factory import RepositoryFactory
from sequence_layout.layout_text import render_text
from sequence_layout.sequence_layout_model import ViewState
from settings.annotation_types import AnnotationTypes
from settings.color_palette import ColorPalette
from settings.config import AppConfig


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser(config: AppConfig) -> argparse.ArgumentParser:
    viewer = config.viewer
    parser = argparse.ArgumentParser(
        description="Compute the annotated row layout of a nucleotide sequence window.",
    )
    parser.add_argument("--fasta", type=Path, help="FASTA file to load (default: configured data source)")
    parser.add_argument("--annotations", type=Path, help="Tab-separated annotation file (requires --fasta)")
    parser.add_argument("--sequence-id", help="Record id to show (default: first record)")
    parser.add_argument("--sanitize", action="store_true", help="Strip characters other than A/T/G/C")
    parser.add_argument("--sample-annotations", action="store_true", help="Load the demo annotations")
    parser.add_argument("--start", type=int, default=0, help="Window start offset (0-based)")
    parser.add_argument("--row-width", type=int, default=viewer.row_width, help="Symbols per row")
    parser.add_argument("--rows", type=int, default=viewer.row_count, help="Number of rows to lay out")
    parser.add_argument("--query", default="", help="Search query to highlight")
    parser.add_argument("--format", choices=("json", "text"), default="json")
    parser.add_argument("--indent", type=int, default=2)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def open_repository(args: argparse.Namespace, config: AppConfig) -> AbstractSequenceRepository:
    if args.fasta is not None:
        config.data_source.type = "file"
        config.data_source.config = {
            "fasta_path": str(args.fasta),
            "annotation_path": str(args.annotations) if args.annotations else None,
            "sequence_id": args.sequence_id,
        }
    return RepositoryFactory(config).create_repository()


def load_model(
    repository: AbstractSequenceRepository,
    annotation_types: AnnotationTypes,
    sequence_id: Optional[str] = None,
    sanitize: bool = False,
) -> SequenceDataModel:
    """
    Seçilen kaydı modele yükler ve kayda ait annotation'ları ekler.
    """
    records = list(repository.list_sequences())
    if not records:
        raise ValueError("Repository contains no sequences")

    record = repository.get_sequence_by_id(sequence_id) if sequence_id else records[0]

    model = SequenceDataModel(annotation_types=annotation_types)
    model.set_sequence(record.sequence, header=record.description, sanitize=sanitize)
    model.annotations.extend(repository.get_annotations(record.id))
    return model


def build_payload(model: SequenceDataModel, view_state: ViewState, config: AppConfig) -> Dict[str, object]:
    layout = model.compute_layout(view_state)

    navigation = NavigationModel(
        page_rows=config.viewer.page_rows,
        match_shortcut_limit=config.viewer.match_shortcut_limit,
    )
    navigation.set_view_state(model.length, view_state)
    nav_layout = navigation.compute_layout(layout.window_start, layout.matches)

    store: AnnotationStore = model.annotations
    return {
        "header": model.header,
        "statistics": model.statistics().to_dict(),
        "navigation": asdict(nav_layout),
        "legend": [dict(entry) for entry in store.legend()],
        "palette": ColorPalette(config).as_dict(),
        "layout": layout.to_dict(),
    }


def main(argv: Optional[List[str]] = None) -> int:
    try:
        config = AppConfig()
    except ValueError as exc:
        # Malformed settings file or environment override
        logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
        logger.error("Could not load settings: %s", exc)
        return 1

    parser = build_parser(config)
    args = parser.parse_args(argv)
    if args.annotations is not None and args.fasta is None:
        parser.error("--annotations requires --fasta")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
    )

    try:
        repository = open_repository(args, config)
        sequence_id = args.sequence_id or config.data_source.config.get("sequence_id")
        model = load_model(repository, AnnotationTypes(config), sequence_id, args.sanitize)
        if args.sample_annotations:
            model.annotations.load_samples()
        view_state = ViewState(
            window_start=args.start,
            row_width=args.row_width,
            row_count=args.rows,
            search_query=args.query,
        )
    except (FileNotFoundError, KeyError, ValueError) as exc:
        logger.error("%s", exc)
        return 1

    if args.format == "text":
        print(render_text(model.compute_layout(view_state)))
    else:
        print(json.dumps(build_payload(model, view_state, config), indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
