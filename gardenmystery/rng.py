import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


class RNG(random.Random):
    """Random source for path tie-breaks; seed it to replay a run."""

    def shuffled(self, items: Sequence[T]) -> List[T]:
        out = list(items)
        self.shuffle(out)
        return out


def new_rng(seed: Optional[int] = None) -> RNG:
    """None draws fresh entropy, so cats pick different equal routes each run."""
    return RNG(seed)
