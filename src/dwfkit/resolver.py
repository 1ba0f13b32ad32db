"""Label-based discovery of analog-IO channels and nodes.

Supplies, the multimeter and the temperature sensor live in the generic
analog-IO channel/node space, where indices differ between device
models. They are located by channel label and node name instead.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from dwfkit.errors import DriverError

if TYPE_CHECKING:
    from dwfkit.session import DeviceSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeAddress:
    channel: int
    node: int


def _labels(labels: str | Iterable[str]) -> list[str]:
    if isinstance(labels, str):
        return [labels]
    return list(labels)


def channel_labels(session: "DeviceSession") -> list[str]:
    """Return the label of every analog-IO channel, in index order.

    Channels whose name cannot be read get an empty label.
    """
    handle = session.require_handle()
    driver = session.driver
    labels = []
    for channel in range(driver.analog_io_channel_count(handle)):
        try:
            _, label = driver.analog_io_channel_name(handle, channel)
        except DriverError as e:
            logger.debug("Analog IO channel %d has no readable name: %s", channel, e)
            label = ""
        labels.append(label)
    return labels


def find_channel(session: "DeviceSession", labels: str | Iterable[str]) -> int | None:
    """Find the first channel matching one of ``labels``.

    Labels are tried in order, so earlier labels take priority.

    Returns:
        The channel index, or None when no channel matches.
    """
    present = channel_labels(session)
    for label in _labels(labels):
        if label in present:
            return present.index(label)
    return None


def channel_nodes(session: "DeviceSession", channel: int) -> dict[str, int]:
    """Map node names to node indices for one analog-IO channel.

    A channel or node that cannot be queried is left out of the map.
    """
    handle = session.require_handle()
    driver = session.driver
    try:
        count = driver.analog_io_channel_info(handle, channel)
    except DriverError as e:
        logger.debug("Analog IO channel %d has no readable nodes: %s", channel, e)
        return {}
    nodes = {}
    for node in range(count):
        try:
            name, _ = driver.analog_io_channel_node_name(handle, channel, node)
        except DriverError as e:
            logger.debug("Analog IO node %d.%d has no readable name: %s", channel, node, e)
            continue
        nodes.setdefault(name, node)
    return nodes


def find_node(
    session: "DeviceSession", labels: str | Iterable[str], node_name: str
) -> NodeAddress | None:
    """Find the named node in the first channel matching one of ``labels``.

    Every matching channel is searched, label by label, until one of
    them carries a node called ``node_name``.

    Returns:
        The NodeAddress, or None when the capability is absent.
    """
    present = channel_labels(session)
    for label in _labels(labels):
        for channel, channel_label in enumerate(present):
            if channel_label != label:
                continue
            node = channel_nodes(session, channel).get(node_name)
            if node is not None:
                return NodeAddress(channel, node)
    logger.debug("No %s node on channels %s", node_name, _labels(labels))
    return None
