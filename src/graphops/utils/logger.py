"""
graphops.utils.logger
=====================
CSV trace of a running edge randomization.

Long randomizations on large graphs can spend most of their time in
rejected draws, so it helps to see how the acceptance rate evolves. The
randomizer calls :py:meth:`SwapLogger.log` after every attempt; only every
``log_every``-th attempt produces a row.

Row schema
----------
```
attempts, accepted, elapsed_seconds, acceptance_rate
```
"""

import csv
import time
from pathlib import Path
from typing import Union, TextIO

__all__ = ["SwapLogger"]

class SwapLogger:
    """Light-weight CSV logger for degree-preserving randomizations.

    Parameters
    ----------
    file
        Path to a CSV file *or* an already opened file handle.  If a path
        is given and the file exists it will be **overwritten** so that
        every run starts with a clean log.
    log_every
        Only every ``log_every``-th call to :py:meth:`log` results in a
        new row.
    """

    header = [
        "attempts",
        "accepted",
        "elapsed_seconds",
        "acceptance_rate",
    ]

    # ---------------------------------------------------------------------
    def __init__(
        self,
        file: Union[str, Path, TextIO],
        *,
        log_every: int = 1_000,
    ):
        if int(log_every) < 1:
            raise ValueError("log_every must be a positive integer.")
        self.log_every = int(log_every)
        self._start = time.time()

        if isinstance(file, (str, Path)):
            path = Path(file)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._own_handle = True
            self._fh: TextIO = path.open("w", newline="")
            self._writer = csv.writer(self._fh)
            self._writer.writerow(self.header)
        else:  # already a file-like object, caller handles the header
            self._own_handle = False
            self._fh = file
            self._writer = csv.writer(self._fh)

        self._rows_since_flush = 0
        self._last_logged = -1

    # ------------------------------------------------------------------
    def log(self, attempts: int, accepted: int, *, force: bool = False) -> None:
        """Append one row if ``attempts`` meets the cadence (or ``force``)."""
        if attempts % self.log_every and not force:
            return
        if attempts == self._last_logged:
            return  # forced row already written by the cadence
        self._last_logged = attempts

        elapsed = time.time() - self._start
        rate = accepted / attempts if attempts else 0.0
        self._writer.writerow([
            attempts,
            accepted,
            f"{elapsed:.3f}",
            f"{rate:.6f}",
        ])
        # Flush every ~10 rows to amortise disk writes.
        self._rows_since_flush += 1
        if self._rows_since_flush >= 10:
            self._fh.flush()
            self._rows_since_flush = 0

    # ------------------------------------------------------------------
    def close(self):
        if self._own_handle:
            self._fh.close()
        else:
            self._fh.flush()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
