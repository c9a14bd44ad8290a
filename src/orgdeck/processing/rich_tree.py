from rich.tree import Tree

from ..models import Document, SlideNode, SlidePath, format_slide_path
from . import Processor


class SlideTreeProcessor(Processor[Tree]):
    """Build a Rich tree of the slides of a document."""

    def __init__(self, show_fragments: bool = True) -> None:
        self._show_fragments = show_fragments

    def process(self, document: Document) -> Tree:
        tree = Tree(f"[bold]{document.title or document.base_dir.name or 'document'}")
        for index, node in enumerate(document.slides):
            self._add(tree, SlidePath((index,)), node)
        return tree

    def _add(self, parent: Tree, path: SlidePath, node: SlideNode) -> None:
        title = node.title or "[italic]untitled[/]"
        label = f"[dim]{format_slide_path(path)}[/] {title}"
        if self._show_fragments and node.fragment_count:
            label += f" [cyan]({node.fragment_count} fragments)[/]"
        if node.tags:
            label += f" [green]:{':'.join(sorted(node.tags))}:[/]"
        subtree = parent.add(label)
        for index, child in enumerate(node.children):
            self._add(subtree, SlidePath((*path, index)), child)
