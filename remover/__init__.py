"""
remover — usuwanie bloków `moved` z plików Terraform.

Publiczne API:
  extract_blocks(document, kind)          -> (Document, int)
  count_blocks(document, kind)            -> int
  normalize(text)                         -> str
  process_source(content, path, options)  -> (ProcessingResult, bytes)
  process_file(path, options)             -> ProcessingResult
  find_terraform_files(root)              -> list[Path]
  run_batch(files, options, reporter)     -> AggregateStats
  Settings.from_env()                     -> Settings

Typowe użycie:
    from remover import Settings, find_terraform_files, run_batch

    options = Settings.from_env().to_options()
    stats   = run_batch(find_terraform_files(Path("infra")), options)
    print(stats.files_modified, stats.blocks_removed)
"""

from .extractor import MOVED_BLOCK, count_blocks, extract_blocks, matching_blocks
from .normalizer import normalize
from .processor import ProcessOptions, process_file, process_source
from .discovery import TERRAFORM_SUFFIX, find_terraform_files
from .batch import fold_outcome, run_batch
from .config import Settings

__all__ = [
    "MOVED_BLOCK",
    "count_blocks",
    "extract_blocks",
    "matching_blocks",
    "normalize",
    "ProcessOptions",
    "process_file",
    "process_source",
    "TERRAFORM_SUFFIX",
    "find_terraform_files",
    "fold_outcome",
    "run_batch",
    "Settings",
]
