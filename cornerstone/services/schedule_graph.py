"""
Dependency graph for the scheduler.

Nodes live in an arena indexed by position; predecessor and successor lists
hold ``(edge, index)`` pairs so the topological sort and both CPM passes run
over plain integers.
"""
import heapq
import logging
from collections import deque
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .schedule_types import DependencyEdge, ScheduleNode

logger = logging.getLogger(__name__)


class ScheduleGraph:
    """Adjacency structure over a set of schedule nodes"""

    def __init__(self, nodes: Iterable[ScheduleNode], edges: Iterable[DependencyEdge]):
        self.nodes: List[ScheduleNode] = list(nodes)
        self.index: Dict[str, int] = {node.id: i for i, node in enumerate(self.nodes)}
        self.predecessors: List[List[Tuple[DependencyEdge, int]]] = [[] for _ in self.nodes]
        self.successors: List[List[Tuple[DependencyEdge, int]]] = [[] for _ in self.nodes]
        # Edges into this graph from nodes outside it (cascade runs)
        self.external_predecessors: List[List[Tuple[DependencyEdge, ScheduleNode]]] = [[] for _ in self.nodes]
        self.edges: List[DependencyEdge] = []
        self.dropped_edges: List[DependencyEdge] = []

        for edge in edges:
            pred = self.index.get(edge.predecessor_id)
            succ = self.index.get(edge.successor_id)
            if pred is None or succ is None:
                self.dropped_edges.append(edge)
                continue
            self.edges.append(edge)
            self.predecessors[succ].append((edge, pred))
            self.successors[pred].append((edge, succ))

        if self.dropped_edges:
            logger.debug(f"Dropped {len(self.dropped_edges)} edge(s) with endpoints outside the graph")

    def __len__(self):
        return len(self.nodes)

    def node_id(self, i: int) -> str:
        return self.nodes[i].id

    def topological_order(self) -> Tuple[List[int], List[int]]:
        """
        Kahn's algorithm over the arena.

        Ready nodes are taken in id order so the result is deterministic.

        Returns:
            (order, blocked): ``order`` holds every node that could be sorted;
            ``blocked`` holds the nodes left with a positive in-degree, which
            is non-empty exactly when the graph has a cycle.
        """
        in_degree = [len(preds) for preds in self.predecessors]
        ready = [(self.nodes[i].id, i) for i, deg in enumerate(in_degree) if deg == 0]
        heapq.heapify(ready)

        order: List[int] = []
        while ready:
            _, i = heapq.heappop(ready)
            order.append(i)
            for _, succ in self.successors[i]:
                in_degree[succ] -= 1
                if in_degree[succ] == 0:
                    heapq.heappush(ready, (self.nodes[succ].id, succ))

        blocked = sorted((i for i, deg in enumerate(in_degree) if deg > 0), key=self.node_id)
        return order, blocked

    def find_cycle(self, candidates: Optional[Iterable[int]] = None) -> List[str]:
        """
        Find one concrete cycle by depth-first search.

        Args:
            candidates: Node indices to start from (defaults to every node)

        Returns:
            Node ids along the cycle with the first id repeated at the end,
            or an empty list when there is no cycle.
        """
        starts = list(candidates) if candidates is not None else range(len(self.nodes))
        WHITE, GREY, BLACK = 0, 1, 2
        color = [WHITE] * len(self.nodes)

        for start in starts:
            if color[start] != WHITE:
                continue
            path: List[int] = []
            stack = [(start, iter(self.successors[start]))]
            color[start] = GREY
            path.append(start)
            while stack:
                current, children = stack[-1]
                advanced = False
                for _, succ in children:
                    if color[succ] == GREY:
                        cycle = path[path.index(succ):] + [succ]
                        return [self.node_id(i) for i in cycle]
                    if color[succ] == WHITE:
                        color[succ] = GREY
                        path.append(succ)
                        stack.append((succ, iter(self.successors[succ])))
                        advanced = True
                        break
                if not advanced:
                    color[current] = BLACK
                    path.pop()
                    stack.pop()
        return []

    def downstream_ids(self, anchor_id: str) -> Set[str]:
        """Anchor plus every node reachable along successor edges"""
        start = self.index[anchor_id]
        visited = {start}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for _, succ in self.successors[current]:
                if succ not in visited:
                    visited.add(succ)
                    queue.append(succ)
        return {self.node_id(i) for i in visited}

    def subgraph(self, ids: Set[str]) -> 'ScheduleGraph':
        """
        Restrict the graph to ``ids``.

        Edges arriving from outside the set are kept on the new graph as
        external predecessors so their fixed dates can still constrain it.
        """
        sub = ScheduleGraph(
            [node for node in self.nodes if node.id in ids],
            [edge for edge in self.edges if edge.predecessor_id in ids and edge.successor_id in ids],
        )
        for edge in self.edges:
            if edge.successor_id in ids and edge.predecessor_id not in ids:
                pred_node = self.nodes[self.index[edge.predecessor_id]]
                sub.external_predecessors[sub.index[edge.successor_id]].append((edge, pred_node))
        return sub
