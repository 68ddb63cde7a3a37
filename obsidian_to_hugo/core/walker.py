"""Vault walker: mirrors a vault directory tree into a Hugo content tree."""

import shutil
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Dict, Set

from obsidian_to_hugo.core.models import ConvertContext, ConvertResult, FileError, NoteFile
from obsidian_to_hugo.core.processor import NoteConverter
from obsidian_to_hugo.transforms import default_content_processors, default_frontmatter_processors

MARKDOWN_EXTENSION = '.md'


def is_hidden(path: Path) -> bool:
    return path.name.startswith('.')


def is_markdown(path: Path) -> bool:
    return path.name.endswith(MARKDOWN_EXTENSION)


class VaultConverter:
    """Converts a whole vault into a Hugo content directory.

    Directories are walked depth-first on the calling thread; every file is
    converted as its own job on a thread pool. convert() does not return
    until every job has finished.
    """

    def __init__(self, context: ConvertContext):
        """Initialize VaultConverter.

        Args:
            context: Paths, options, and processors for this run
        """
        self.context = context
        self.note_converter = NoteConverter(context)

    def convert(self) -> ConvertResult:
        """Convert the vault into the output directory.

        Returns:
            ConvertResult listing converted notes, copied files, and
            per-file failures

        Raises:
            OSError: If a directory cannot be read, created, or cleared.
                Files already scheduled still finish before this is raised.
        """
        if not self.context.vault_dir.is_dir():
            raise FileNotFoundError(f"Vault directory not found: {self.context.vault_dir}")

        self.prepare_output_dir()

        jobs: Dict[Future, Path] = {}
        # The output directory may live inside the vault; never mirror it into itself
        visited = {self.context.vault_dir.resolve(), self.context.output_dir.resolve()}
        with ThreadPoolExecutor(max_workers=self.context.max_workers) as executor:
            self._convert_dir(self.context.vault_dir, self.context.output_dir, executor, jobs, visited)

        result = ConvertResult()
        for future, source_path in jobs.items():
            error = future.exception()
            if error is not None:
                result.failures.append(FileError(path=source_path, error=str(error)))
            elif is_markdown(source_path):
                result.converted.append(source_path)
            else:
                result.copied.append(source_path)

        return result

    def prepare_output_dir(self) -> None:
        """Create the output directory, emptying it first if configured to.

        Only entries inside the output directory are removed.
        """
        output_dir = self.context.output_dir

        if not self.context.clear_output_dir or not output_dir.exists():
            output_dir.mkdir(parents=True, exist_ok=True)
            return

        for entry in output_dir.iterdir():
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()

    def _convert_dir(
        self,
        source_dir: Path,
        dest_dir: Path,
        executor: ThreadPoolExecutor,
        jobs: Dict[Future, Path],
        visited: Set[Path],
    ) -> None:
        """Mirror one directory, recursing into subdirectories.

        The mirrored directory is created before any file under it is
        scheduled. Directories already in visited (resolved paths) are
        skipped, which covers the output directory and symlink loops.
        """
        for source_path in sorted(source_dir.iterdir()):
            if is_hidden(source_path):
                continue

            dest_path = dest_dir / source_path.name

            if source_path.is_dir():
                real_path = source_path.resolve()
                if real_path in visited:
                    continue
                visited.add(real_path)

                dest_path.mkdir(exist_ok=True)
                self._convert_dir(source_path, dest_path, executor, jobs, visited)
            else:
                future = executor.submit(self.convert_file, source_path, dest_path)
                jobs[future] = source_path

    def convert_file(self, source_path: Path, dest_path: Path) -> None:
        """Convert or copy a single file.

        Markdown notes run through the note converter; anything else is
        written back byte-for-byte.

        Raises:
            OSError: If the file cannot be read or written
            UnicodeDecodeError: If a note is not UTF-8
            FrontMatterError: If a note's front matter is malformed
        """
        file = NoteFile(
            source_path=source_path,
            dest_path=dest_path,
            contents=source_path.read_bytes(),
        )

        if is_markdown(source_path):
            output = self.note_converter.process(file)
            dest_path.write_text(output, encoding='utf-8')
        else:
            dest_path.write_bytes(file.contents)


def convert(
    vault_dir: Path,
    output_dir: Path,
    clear_output_dir: bool = False,
    **options,
) -> ConvertResult:
    """Convert a vault using the default processors.

    Args:
        vault_dir: Obsidian vault to read
        output_dir: Hugo content directory to write
        clear_output_dir: Remove everything under output_dir first
        **options: Other ConvertContext fields (max_workers,
            timestamp_lookup, processor lists)

    Returns:
        ConvertResult for the run
    """
    options.setdefault('frontmatter_processors', default_frontmatter_processors())
    options.setdefault('content_processors', default_content_processors())

    context = ConvertContext(
        vault_dir=vault_dir,
        output_dir=output_dir,
        clear_output_dir=clear_output_dir,
        **options,
    )
    return VaultConverter(context).convert()
