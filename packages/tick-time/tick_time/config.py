"""Time facade configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TimeConfig:
    """Defaults applied by a TimeContext when a call leaves them unset.

    Attributes:
        reject_on_cancel: Whether cancelled delays reject their result.
        auto_start: Whether new primitives start immediately.
        catch_up: Whether deterministic schedulers built by the context fire
            every elapsed period in a single advance.
    """

    reject_on_cancel: bool = True
    auto_start: bool = True
    catch_up: bool = True
