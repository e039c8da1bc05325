from pydantic import BaseModel, ConfigDict, Field, RootModel
from typing import Iterator, List

from .recovery import IndexOutOfRangeError

# Children below this depth stay in the data but are not rendered
MAX_RENDER_DEPTH = 5
INDENT = "    "

class TaskNode(BaseModel):
    """One to-do entry and its ordered subtasks."""

    # Unknown keys from the persisted document survive a load/save cycle
    model_config = ConfigDict(extra='allow')

    title: str = Field(description="Short human readable summary of the task")
    details: str = Field(description="Free text notes attached to the task")
    completed: bool = Field(description="Whether the task has been marked complete")
    children: List['TaskNode'] = Field(description="Ordered list of subtasks owned by this task")

    @classmethod
    def new(cls, title: str) -> 'TaskNode':
        """Build a fresh, incomplete leaf task."""
        return cls(title=title, details="", completed=False, children=[])

    def render(self, depth: int = 0) -> str:
        """Render the checkbox line for this task followed by its subtasks."""
        box = "[x] " if self.completed else "[ ] "
        text = INDENT * depth + box + self.title + "\n"
        if depth < MAX_RENDER_DEPTH:
            text += "".join(child.render(depth + 1) for child in self.children)
        return text

    def complete(self):
        """Mark this task and every task below it as complete."""
        stack = [self]
        while stack:
            node = stack.pop()
            node.completed = True
            stack.extend(node.children)

    def mark_incomplete(self):
        self.completed = False

    def walk(self) -> Iterator['TaskNode']:
        """Yield this task and all of its descendants, depth first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def __str__(self) -> str:
        return self.render()

TaskNode.model_rebuild()

class TaskForest(RootModel[List[TaskNode]]):
    """The ordered list of top-level tasks, addressed by position."""

    root: List[TaskNode] = Field(default_factory=list)

    def __iter__(self) -> Iterator[TaskNode]:
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> TaskNode:
        return self.root[self._check_index(index)]

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self.root):
            raise IndexOutOfRangeError(index, len(self.root))
        return index

    def add(self, title: str) -> TaskNode:
        """Append a new root task and return it."""
        node = TaskNode.new(title)
        self.root.append(node)
        return node

    def delete(self, index: int) -> TaskNode:
        """Remove the root task at index along with its whole subtree."""
        return self.root.pop(self._check_index(index))

    def complete(self, index: int) -> TaskNode:
        node = self[index]
        node.complete()
        return node

    def mark_incomplete(self, index: int) -> TaskNode:
        node = self[index]
        node.mark_incomplete()
        return node

    def render(self) -> str:
        return "".join(node.render() for node in self.root)
