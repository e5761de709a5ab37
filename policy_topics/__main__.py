"""
CLI entry point for the policy statement analysis pipeline.

Reads already-extracted statement text (one .txt file per document, the
file stem is the document id), runs the full analysis and exports every
table of the run.

Input defaults come from settings.paths: data/raw for statements, and
data/document_dates.csv and data/dictionary/sentiment_lexicon.csv when
those files exist.

Output layout:
    data/processed/
    └── {YYYYMMDD_HHMMSS}_lda_k{K}/
        ├── run_config.yaml                # Parameters of the run
        ├── run_info.json                  # RunMetadata + corpus summary
        ├── model_info.json                # LDAModelInfo + log-likelihood trace
        └── *.csv                          # Frequency, sentiment, tracking, topic tables

Usage:
    python -m policy_topics                      # data/raw, data/document_dates.csv
    python -m policy_topics --input-dir statements/2021
    python -m policy_topics --input-dir data/raw --dates data/document_dates.csv \\
        --lexicon data/dictionary/sentiment_lexicon.csv --topics 3 --sweeps 500 --seed 7
    python -m policy_topics --input-dir data/raw --watch inflation unemployment
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from policy_topics.config import RunContext, settings
from policy_topics.features.dictionaries import load_lexicon
from policy_topics.features.topic_modeling import LDATrainer
from policy_topics.pipeline import CorpusAnalysisPipeline, PipelineConfig
from policy_topics.preprocessing import Document, tokenizer_from_settings
from policy_topics.utils.metadata import RunMetadata

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _date_from_stem(stem: str) -> Optional[date]:
    try:
        return date.fromisoformat(stem)
    except ValueError:
        return None


def read_documents(input_dir: Path, encoding: str = "utf-8") -> List[Document]:
    """
    Load every *.txt file of a directory, sorted by file name.

    Raises:
        FileNotFoundError: If input_dir does not exist
    """
    if not input_dir.is_dir():
        raise FileNotFoundError(f"Input directory not found: {input_dir}")

    documents = []
    for path in sorted(input_dir.glob("*.txt")):
        documents.append(
            Document(
                doc_id=path.stem,
                text=path.read_text(encoding=encoding),
                published=_date_from_stem(path.stem),
            )
        )
    logger.info(f"Read {len(documents)} documents from {input_dir}")
    return documents


def read_dates(dates_path: Path) -> Dict[str, date]:
    """
    Load a (document, date) CSV into doc_id -> date.

    Raises:
        FileNotFoundError: If the CSV doesn't exist
        ValueError: If the document or date column is missing
    """
    if not dates_path.exists():
        raise FileNotFoundError(f"Dates file not found: {dates_path}")

    df = pd.read_csv(dates_path, dtype={"document": str})
    missing = {"document", "date"} - set(df.columns)
    if missing:
        raise ValueError(f"Missing required columns in {dates_path}: {sorted(missing)}")

    parsed = pd.to_datetime(df["date"], errors="coerce")
    unparsed = int(parsed.isna().sum())
    if unparsed:
        logger.warning(f"{unparsed} rows of {dates_path} have unreadable dates")

    return {
        doc_id: timestamp.date()
        for doc_id, timestamp in zip(df["document"], parsed)
        if not pd.isna(timestamp)
    }


def build_parser() -> argparse.ArgumentParser:
    model = settings.topic_modeling.model
    ap = argparse.ArgumentParser(
        prog="policy_topics",
        description="Policy statement analysis: Tokenize -> Count -> Rank -> Score -> Track -> LDA",
    )
    ap.add_argument('--input-dir', type=str, default=None, dest='input_dir',
                    help='Directory of extracted statement text (*.txt) (default: data/raw)')
    ap.add_argument('--dates', type=str, default=None,
                    help='CSV with document,date columns (default: data/document_dates.csv '
                         'if present, else ISO-dated file names)')
    ap.add_argument('--lexicon', type=str, default=None,
                    help='Sentiment lexicon CSV (default: data/dictionary/sentiment_lexicon.csv if present)')
    ap.add_argument('--topics', type=int, default=model.num_topics,
                    help=f'Number of LDA topics (default: {model.num_topics})')
    ap.add_argument('--sweeps', type=int, default=model.sweeps,
                    help=f'Gibbs sweeps (default: {model.sweeps})')
    ap.add_argument('--seed', type=int, default=model.random_state,
                    help=f'Random seed (default: {model.random_state})')
    ap.add_argument('--watch', nargs='+', default=None, metavar='TERM',
                    help='Watch terms to track over time (default: lexical.watch_terms)')
    ap.add_argument('--output-dir', type=str, default=None, dest='output_dir',
                    help='Base output directory (default: data/processed)')
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    input_dir = Path(args.input_dir) if args.input_dir else settings.paths.raw_data_dir
    documents = read_documents(input_dir, settings.preprocessing.text_encoding)

    timestamps = None
    dates_path = Path(args.dates) if args.dates else settings.paths.dates_path
    if args.dates or dates_path.exists():
        timestamps = read_dates(dates_path)
    else:
        logger.info(f"No dates file at {dates_path}; dating documents by file name")

    lexicon = None
    lexicon_path = Path(args.lexicon) if args.lexicon else settings.paths.lexicon_path
    if args.lexicon or lexicon_path.exists():
        lexicon = load_lexicon(lexicon_path)
    else:
        logger.info(f"No lexicon at {lexicon_path}; sentiment scoring is skipped")

    model = settings.topic_modeling.model
    trainer = LDATrainer(
        num_topics=args.topics,
        alpha=model.alpha,
        beta=model.beta,
        sweeps=args.sweeps,
        random_state=args.seed,
        convergence_tolerance=model.convergence_tolerance,
        eval_every=model.eval_every,
        compute_coherence=settings.topic_modeling.output.compute_coherence,
        coherence_top_n=settings.topic_modeling.output.num_topic_words,
    )

    config = PipelineConfig.from_settings()
    if args.watch:
        config.watch_terms = args.watch

    pipeline = CorpusAnalysisPipeline(
        tokenizer=tokenizer_from_settings(),
        trainer=trainer,
        lexicon=lexicon,
        config=config,
    )

    run = RunContext(
        name=f"lda_k{args.topics}",
        base_dir=Path(args.output_dir) if args.output_dir else None,
    ).create()
    run.save_config({
        "input_dir": str(input_dir),
        "dates": str(dates_path) if timestamps is not None else None,
        "lexicon": str(lexicon_path) if lexicon is not None else None,
        "num_topics": trainer.num_topics,
        "alpha": trainer.alpha,
        "beta": trainer.beta,
        "sweeps": trainer.sweeps,
        "random_state": trainer.random_state,
        "convergence_tolerance": trainer.convergence_tolerance,
        "watch_terms": list(config.watch_terms),
    })

    try:
        result = pipeline.run(documents, timestamps=timestamps)
    except Exception as exc:
        logger.error(f"Analysis failed: {exc}")
        raise

    pipeline.export(result, run.output_dir)

    run_info = RunMetadata.gather()
    run_info.update({
        "run_id": run.run_id,
        "num_documents": len(documents),
        "num_kept_documents": result.corpus.matrix.n_documents,
        "dropped_documents": result.corpus.dropped_documents,
        "vocabulary_size": len(result.corpus.vocabulary),
        "sweeps_completed": result.lda.sweeps_completed,
        "converged": result.lda.converged,
    })
    with open(run.output_dir / "run_info.json", 'w', encoding='utf-8') as f:
        json.dump(run_info, f, indent=2)

    print(f"\n{'=' * 50}")
    print(f"Documents:   {result.corpus.matrix.n_documents} kept, "
          f"{result.corpus.num_dropped} dropped")
    print(f"Vocabulary:  {len(result.corpus.vocabulary)} terms")
    print(f"Sweeps:      {result.lda.sweeps_completed}/{result.lda.sweeps}")
    for topic_id in range(result.lda.num_topics):
        print(result.model_info.get_topic_description(topic_id, num_words=8))
    print(f"Output:      {run.output_dir}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
