"""Lineup search: exhaustive scan, bounded depth-first search, and a process fan-out."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import multiprocessing as mp
import os
import time
from collections import Counter
from typing import Callable, List, Optional, Sequence, Tuple, Union

from racedfs.config import RaceConfig, check_config
from racedfs.models import DriverRecord

from .combinations import block_count, count_lineups, iter_lineup_block, iter_lineups
from .evaluator import LineupTotals, evaluate_lineup
from .prediction import InfeasibilityReason, InfeasibleResult, Prediction, aggregate
from .scoring import ScoredDriver, score_drivers


logger = logging.getLogger(__name__)

_WORKERS_ENV = "RACEDFS_WORKERS"
_STRATEGY_ENV = "RACEDFS_STRATEGY"

_WORKERS_DEFAULT = 1
_STRATEGY_DEFAULT = "exhaustive"
STRATEGIES = ("exhaustive", "bound")

# Absolute slack on the score bound so float summation order never prunes a winner.
_BOUND_EPSILON = 1e-9

OptimizeResult = Union[Prediction, InfeasibleResult]
StopCheck = Callable[[], bool]


class DuplicateDriverError(ValueError):
    """Raised when a driver pool repeats a driver name."""


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def _env_choice(name: str, default: str, choices: Sequence[str]) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value not in choices:
        logger.warning("Invalid choice for %s: %s; using default %s", name, raw, default)
        return default
    return value


def default_workers() -> int:
    return _env_int(_WORKERS_ENV, _WORKERS_DEFAULT, min_value=1)


def default_strategy() -> str:
    return _env_choice(_STRATEGY_ENV, _STRATEGY_DEFAULT, STRATEGIES)


@dataclass
class _SearchState:
    best_lineup: Optional[Tuple[ScoredDriver, ...]] = None
    best_totals: Optional[LineupTotals] = None
    evaluated: int = 0
    truncated: bool = False

    def offer(self, lineup: Tuple[ScoredDriver, ...], totals: LineupTotals) -> None:
        # Strictly greater only: the first lineup to reach a maximum keeps it.
        if self.best_totals is None or totals.score > self.best_totals.score:
            self.best_lineup = lineup
            self.best_totals = totals


def _check_pool(drivers: Sequence[DriverRecord]) -> None:
    counts = Counter(driver.name for driver in drivers)
    duplicates = sorted(name for name, count in counts.items() if count > 1)
    if duplicates:
        raise DuplicateDriverError(f"Driver pool repeats names: {', '.join(duplicates)}")


def _stopped(should_stop: Optional[StopCheck]) -> bool:
    return should_stop is not None and bool(should_stop())


def _search_exhaustive(
    scored: Sequence[ScoredDriver],
    config: RaceConfig,
    should_stop: Optional[StopCheck] = None,
) -> _SearchState:
    state = _SearchState()
    for lineup in iter_lineups(scored, config.lineup_size):
        if _stopped(should_stop):
            state.truncated = True
            break
        state.evaluated += 1
        totals = evaluate_lineup(lineup)
        if totals.salary > config.salary_cap:
            continue
        state.offer(lineup, totals)
    return state


def _suffix_tables(scored: Sequence[ScoredDriver], size: int) -> Tuple[List[List[float]], List[List[float]]]:
    """For each start index j, cumulative sums of the best scores and cheapest salaries in ``scored[j:]``."""

    top_scores: List[List[float]] = []
    low_salaries: List[List[float]] = []
    for start in range(len(scored) + 1):
        tail = scored[start:]
        scores = sorted((member.score for member in tail), reverse=True)[:size]
        salaries = sorted(member.salary for member in tail)[:size]
        score_sums = [0.0]
        for value in scores:
            score_sums.append(score_sums[-1] + value)
        salary_sums = [0]
        for value in salaries:
            salary_sums.append(salary_sums[-1] + value)
        top_scores.append(score_sums)
        low_salaries.append(salary_sums)
    return top_scores, low_salaries


def _search_bound(
    scored: Sequence[ScoredDriver],
    config: RaceConfig,
    should_stop: Optional[StopCheck] = None,
) -> _SearchState:
    """Depth-first search in enumeration order, pruning branches that cannot win.

    Leaves are visited in the same order as ``iter_lineups`` and only
    branches that could not beat the current best are skipped, so the result
    matches the exhaustive scan including its tie-break.
    """

    state = _SearchState()
    size = config.lineup_size
    cap = config.salary_cap
    pool_size = len(scored)
    top_scores, low_salaries = _suffix_tables(scored, size)
    chosen: List[ScoredDriver] = []

    def descend(start: int, salary: float, score: float) -> bool:
        remaining = size - len(chosen)
        if remaining == 0:
            state.evaluated += 1
            lineup = tuple(chosen)
            totals = evaluate_lineup(lineup)
            if totals.salary <= cap:
                state.offer(lineup, totals)
            return True
        for index in range(start, pool_size - remaining + 1):
            if _stopped(should_stop):
                state.truncated = True
                return False
            member = scored[index]
            next_salary = salary + member.salary
            if next_salary + low_salaries[index + 1][remaining - 1] > cap:
                continue
            next_score = score + member.score
            if state.best_totals is not None:
                ceiling = next_score + top_scores[index + 1][remaining - 1]
                if ceiling + _BOUND_EPSILON < state.best_totals.score:
                    continue
            chosen.append(member)
            finished = descend(index + 1, next_salary, next_score)
            chosen.pop()
            if not finished:
                return False
        return True

    descend(0, 0, 0.0)
    return state


@dataclass
class _BlockJob:
    job_id: int
    blocks: Tuple[int, ...]
    scored: List[ScoredDriver]
    config: RaceConfig


@dataclass
class _BlockBest:
    block: int
    indices: Optional[Tuple[int, ...]]
    salary: float
    score: float
    evaluated: int


@dataclass
class _BlockJobResult:
    job_id: int
    blocks: List[_BlockBest] = field(default_factory=list)


def _run_block_job(job: _BlockJob) -> _BlockJobResult:
    size = job.config.lineup_size
    cap = job.config.salary_cap
    positions = list(range(len(job.scored)))
    outcome = _BlockJobResult(job.job_id)
    for block in job.blocks:
        best_indices: Optional[Tuple[int, ...]] = None
        best_totals: Optional[LineupTotals] = None
        evaluated = 0
        for indices in iter_lineup_block(positions, size, block):
            evaluated += 1
            totals = evaluate_lineup(tuple(job.scored[i] for i in indices))
            if totals.salary > cap:
                continue
            if best_totals is None or totals.score > best_totals.score:
                best_indices = indices
                best_totals = totals
        outcome.blocks.append(
            _BlockBest(
                block=block,
                indices=best_indices,
                salary=best_totals.salary if best_totals else 0,
                score=best_totals.score if best_totals else 0.0,
                evaluated=evaluated,
            )
        )
    return outcome


def _block_worker(job: _BlockJob, queue: mp.Queue) -> None:
    try:
        queue.put(_run_block_job(job))
    except Exception as exc:  # pragma: no cover - worker errors bubble to parent
        queue.put(exc)


def _search_parallel(
    scored: Sequence[ScoredDriver],
    config: RaceConfig,
    workers: int,
) -> _SearchState:
    """Split the enumeration by first index across processes and reduce in block order."""

    blocks = block_count(len(scored), config.lineup_size)
    workers = max(1, min(workers, blocks))
    # Early blocks are the largest, so deal them out round-robin.
    assignments = [tuple(range(worker, blocks, workers)) for worker in range(workers)]
    scored_list = list(scored)

    ctx = mp.get_context("spawn")
    queue: mp.Queue = ctx.Queue()
    processes: dict[int, mp.Process] = {}
    by_block: dict[int, _BlockBest] = {}

    try:
        for job_id, assigned in enumerate(assignments):
            job = _BlockJob(job_id=job_id, blocks=assigned, scored=scored_list, config=config)
            proc = ctx.Process(target=_block_worker, args=(job, queue))
            proc.start()
            processes[job_id] = proc
            logger.debug("Dispatched job %s with %s blocks", job_id, len(assigned))

        while processes:
            outcome = queue.get()
            if isinstance(outcome, Exception):
                raise outcome
            proc = processes.pop(outcome.job_id, None)
            if proc is not None:
                proc.join()
            for best in outcome.blocks:
                by_block[best.block] = best
            logger.debug("Job %s completed (%s blocks)", outcome.job_id, len(outcome.blocks))
    finally:
        for proc in processes.values():
            if proc.is_alive():
                proc.terminate()
            proc.join()

    state = _SearchState()
    for block in sorted(by_block):
        best = by_block[block]
        state.evaluated += best.evaluated
        if best.indices is None:
            continue
        lineup = tuple(scored_list[i] for i in best.indices)
        state.offer(lineup, LineupTotals(salary=best.salary, score=best.score))
    return state


def optimize(
    drivers: Sequence[DriverRecord],
    config: RaceConfig,
    *,
    strategy: Optional[str] = None,
    workers: Optional[int] = None,
    should_stop: Optional[StopCheck] = None,
) -> OptimizeResult:
    """Return the highest-scoring lineup within the salary cap.

    Ties go to the lineup that appears first in enumeration order (input
    index, lexicographic). A pool smaller than the lineup size, or one where
    every lineup breaks the cap, yields an :class:`InfeasibleResult` instead
    of a prediction.

    ``should_stop`` is polled between lineup evaluations; when it returns
    True the best lineup seen so far comes back marked ``truncated``.
    """

    check_config(config)
    _check_pool(drivers)

    strategy = (strategy or default_strategy()).lower()
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown search strategy {strategy!r}; expected one of {', '.join(STRATEGIES)}")
    workers = default_workers() if workers is None else max(1, workers)
    if workers > 1 and should_stop is not None:
        raise ValueError("should_stop is not supported with workers > 1")
    if workers > 1 and strategy != "exhaustive":
        logger.warning("Strategy %s runs in a single process; ignoring workers=%s", strategy, workers)
        workers = 1

    size = config.lineup_size
    pool_size = len(drivers)
    if pool_size < size:
        logger.warning("Driver pool has %s drivers; lineup needs %s", pool_size, size)
        return InfeasibleResult(
            reason=InfeasibilityReason.INSUFFICIENT_CANDIDATES,
            message=f"pool has {pool_size} drivers but a lineup needs {size}",
            pool_size=pool_size,
            lineup_size=size,
        )

    scored = score_drivers(drivers, config)
    logger.info(
        "Starting lineup search – pool=%s, lineup_size=%s, combinations=%s, salary_cap=%s, "
        "differential_weight=%.2f, strategy=%s, workers=%s",
        pool_size,
        size,
        count_lineups(pool_size, size),
        config.salary_cap,
        config.differential_weight,
        strategy,
        workers,
    )

    start_time = time.perf_counter()
    if workers > 1:
        state = _search_parallel(scored, config, workers)
    elif strategy == "bound":
        state = _search_bound(scored, config, should_stop)
    else:
        state = _search_exhaustive(scored, config, should_stop)
    elapsed = time.perf_counter() - start_time

    if state.truncated:
        logger.warning("Lineup search truncated after %s lineups (%.2fs)", state.evaluated, elapsed)

    if state.best_lineup is None or state.best_totals is None:
        logger.warning(
            "No lineup fits salary cap %s (%s lineups evaluated, %.2fs)",
            config.salary_cap,
            state.evaluated,
            elapsed,
        )
        return InfeasibleResult(
            reason=InfeasibilityReason.NO_FEASIBLE_LINEUP,
            message=f"no {size}-driver lineup fits the salary cap of {config.salary_cap}",
            pool_size=pool_size,
            lineup_size=size,
            evaluated=state.evaluated,
            truncated=state.truncated,
        )

    logger.info(
        "Selected lineup – score %.2f, salary %s (evaluated %s, elapsed %.2fs)",
        state.best_totals.score,
        state.best_totals.salary,
        state.evaluated,
        elapsed,
    )
    return aggregate(
        state.best_lineup,
        state.best_totals,
        config,
        evaluated=state.evaluated,
        truncated=state.truncated,
    )
