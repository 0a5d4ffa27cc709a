import numpy as np
from pathlib import Path
from csv import writer
from shutil import copyfile
from os import remove
from os.path import exists
from collections.abc import Collection


class FilePrinter:
    """
    Handles writing rows to a csv file with buffering and safe-saving.
    It writes to a temporary file first and then replaces the original
    to prevent corruption during interruption.
    """
    def __init__(
            self,
            file_name: str,
            save_freq: int,
            header: Collection[str] = None,
            create_dir: bool = True
    ):
        self.file_name = file_name
        self.temp_file_path = '-temp.'.join(self.file_name.rsplit('.', 1))
        self.save_freq = max(1, save_freq)
        self.call_count = 0
        self.buffer = None
        self._create_file(header, create_dir)

    def __call__(self, data_array: np.ndarray):
        """
        Adds rows to the buffer and writes them out if the save frequency is met.
        """
        self.call_count += 1
        if self.buffer is None:
            self.buffer = np.atleast_2d(data_array)
        else:
            self.buffer = np.concatenate((self.buffer, np.atleast_2d(data_array)), axis=0)

        if self.call_count % self.save_freq == 0:
            self.flush()

    def flush(self):
        """
        Writes any buffered rows to the file.
        """
        if self.buffer is not None:
            self._copy_and_replace()
            self.buffer = None

    def _print(self):
        with open(self.temp_file_path, 'a', newline='') as f:
            writer(f).writerows(self.buffer)

    def _copy_and_replace(self):
        try:
            if exists(self.file_name):
                copyfile(self.file_name, self.temp_file_path)
            self._print()
            copyfile(self.temp_file_path, self.file_name)
        finally:
            if exists(self.temp_file_path):
                remove(self.temp_file_path)

    def _create_file(self, header: Collection[str], create_dir: bool):
        p = Path(self.file_name)
        if create_dir:
            p.parent.mkdir(parents=True, exist_ok=True)

        with open(self.file_name, 'w', newline='') as f:
            if header is not None:
                writer(f).writerow(header)


class Logger:
    """
    Writes a per-generation trace of the NSGA-III run to `{file_prefix}-generations.csv`.
    """
    def __init__(
            self,
            file_prefix: str,
            n_objs: int,
            save_freq: int = 1,
        ):
        self.n_objs = n_objs
        self.generation_printer = FilePrinter(
            file_name=f"{file_prefix}-generations.csv",
            save_freq=save_freq,
            header=["iter", "evaluations", "front_size", "boundary_rank"]
                   + [f"ideal_{k}" for k in range(n_objs)]
                   + [f"nadir_{k}" for k in range(n_objs)],
        )

    def log_iteration(self, iteration: int, population):
        """
        Logs front statistics and the ideal/nadir estimate of the last selection.

        Args:
            iteration (int): The current iteration number.
            population (Population): The population after environmental selection.
        """
        selection = population.last_selection
        if selection is None or selection.ideal is None:
            # niching was skipped, no normalization took place
            ideal = np.full(self.n_objs, np.nan)
            nadir = np.full(self.n_objs, np.nan)
        else:
            ideal, nadir = selection.ideal, selection.nadir
        boundary_rank = selection.boundary_rank if selection is not None else 0

        row = np.concatenate((
            [iteration, population.evaluations, int((population.ranks == 1).sum()), boundary_rank],
            ideal,
            nadir,
        ))
        self.generation_printer(row)

    def finalize(self):
        """
        Flushes all log files.
        """
        self.generation_printer.flush()
