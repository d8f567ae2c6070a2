from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from .models import Turn


@dataclass(frozen=True)
class Conversation:
    """按追加顺序排列的对话记录，只允许 append。"""

    turns: Tuple[Turn, ...] = ()

    def append(self, turn: Turn) -> "Conversation":
        return Conversation(turns=self.turns + (turn,))

    @property
    def last(self) -> Optional[Turn]:
        return self.turns[-1] if self.turns else None

    def to_list(self) -> List[Dict[str, str]]:
        return [t.to_dict() for t in self.turns]

    def __len__(self) -> int:
        return len(self.turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(self.turns)

    def __getitem__(self, index: int) -> Turn:
        return self.turns[index]
