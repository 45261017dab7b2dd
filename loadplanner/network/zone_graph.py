"""
Zone graph builder for travel-time modeling.

This module builds a NetworkX graph whose nodes are the depot and the delivery
zones and whose edges carry travel minutes, so that travel-time lookups and
network analysis can share one representation of the geography.
"""

import networkx as nx
from typing import Dict, List, Optional, Tuple
import logging

from ..models.planning_config import PlanningConfig
from ..models.zone import DeliveryZone

logger = logging.getLogger(__name__)

DEPOT_NODE = "DEPOT"


class ZoneGraphBuilder:
    """
    Builds an undirected NetworkX graph from a planning configuration.

    Nodes:
        - "DEPOT" with the depot name and coordinates
        - One node per DeliveryZone with its centre coordinates

    Edges:
        - Depot to zone, attribute ``minutes`` from ``depot_minutes``
        - Zone to zone, attribute ``minutes`` from ``zone_links``

    Example:
        builder = ZoneGraphBuilder(PlanningConfig())
        graph = builder.build_graph()
        graph["DEPOT"]["West"]["minutes"]  # 15
    """

    def __init__(self, config: PlanningConfig):
        """
        Initialize graph builder with a planning configuration.

        Args:
            config: Planning configuration with depot and zone tables
        """
        self.config = config
        self.graph: Optional[nx.Graph] = None

    def build_graph(self) -> nx.Graph:
        """
        Build the zone graph.

        Returns:
            NetworkX Graph with the depot and zones as nodes
        """
        graph = nx.Graph()

        depot = self.config.depot
        graph.add_node(
            DEPOT_NODE,
            node_type="depot",
            name=depot.name,
            latitude=depot.latitude,
            longitude=depot.longitude,
        )

        for zone in DeliveryZone:
            center = self.config.zone_centers.get(zone)
            graph.add_node(
                zone.value,
                node_type="zone",
                name=zone.value,
                latitude=center.latitude if center else None,
                longitude=center.longitude if center else None,
            )

        for zone, minutes in self.config.depot_minutes.items():
            graph.add_edge(DEPOT_NODE, zone.value, minutes=minutes)

        for link in self.config.zone_links:
            graph.add_edge(link.zone_a.value, link.zone_b.value, minutes=link.minutes)

        logger.debug(
            f"Zone graph built: {graph.number_of_nodes()} nodes, {graph.number_of_edges()} edges"
        )

        self.graph = graph
        return graph

    def get_graph(self) -> nx.Graph:
        """Return the graph, building it on first use."""
        if self.graph is None:
            self.build_graph()
        return self.graph

    def edge_minutes(self, node_a: str, node_b: str) -> Optional[float]:
        """
        Direct edge travel time between two nodes.

        Args:
            node_a: Node name ("DEPOT" or a zone value)
            node_b: Node name

        Returns:
            Minutes on the direct edge, or None if there is no such edge
        """
        graph = self.get_graph()
        if not graph.has_edge(node_a, node_b):
            return None
        return graph[node_a][node_b]["minutes"]

    def shortest_minutes(self, node_a: str, node_b: str) -> Optional[float]:
        """
        Shortest travel time over the graph, allowing intermediate zones.

        Returns:
            Minutes along the shortest path, or None if disconnected
        """
        graph = self.get_graph()
        try:
            return nx.shortest_path_length(graph, node_a, node_b, weight="minutes")
        except (nx.NetworkXNoPath, nx.NodeNotFound):
            return None

    def missing_links(self) -> List[Tuple[DeliveryZone, DeliveryZone]]:
        """Zone pairs without a direct edge (these fall back to the unknown-pair time)."""
        graph = self.get_graph()
        zones = list(DeliveryZone)
        missing = []
        for i, zone_a in enumerate(zones):
            for zone_b in zones[i + 1:]:
                if not graph.has_edge(zone_a.value, zone_b.value):
                    missing.append((zone_a, zone_b))
        return missing

    def get_network_stats(self) -> Dict[str, float]:
        """Summary statistics of the zone graph."""
        graph = self.get_graph()
        minutes = [data["minutes"] for _, _, data in graph.edges(data=True)]
        return {
            "num_nodes": graph.number_of_nodes(),
            "num_edges": graph.number_of_edges(),
            "is_connected": nx.is_connected(graph),
            "avg_edge_minutes": sum(minutes) / len(minutes) if minutes else 0.0,
            "max_edge_minutes": max(minutes) if minutes else 0.0,
        }
