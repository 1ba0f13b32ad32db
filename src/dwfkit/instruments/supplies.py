"""Power supplies exposed through the analog-IO node space."""

import logging

from dwfkit import resolver
from dwfkit.config import SuppliesConfig
from dwfkit.instruments.base import Instrument

logger = logging.getLogger(__name__)

# rail name -> accepted channel labels, most common first
RAIL_LABELS = {
    "positive": ["V+", "p25V"],
    "negative": ["V-", "n25V"],
    "digital": ["VDD", "p6V"],
}


class PowerSupply(Instrument):
    """Positive, negative and digital supply rails.

    Rails missing on the connected model are skipped.
    """

    def _set_node(self, labels: list[str], node_name: str, value: float) -> bool:
        address = resolver.find_node(self.session, labels, node_name)
        if address is None:
            return False
        self.driver.analog_io_channel_node_set(
            self._handle(), address.channel, address.node, value
        )
        return True

    def switch(self, config: SuppliesConfig | None = None) -> list[str]:
        """Program every rail present, then the master enable.

        Returns:
            The names of the rails that were found and programmed.
        """
        config = config or SuppliesConfig()
        handle = self._handle()
        settings = {
            "positive": (config.positive_state, config.positive_voltage, config.positive_current),
            "negative": (config.negative_state, config.negative_voltage, config.negative_current),
            "digital": (config.state, config.voltage, config.current),
        }
        programmed = []
        for rail, (state, voltage, current) in settings.items():
            labels = RAIL_LABELS[rail]
            found = self._set_node(labels, "Enable", float(state))
            found = self._set_node(labels, "Voltage", voltage) or found
            found = self._set_node(labels, "Current", current) or found
            if found:
                programmed.append(rail)
                logger.debug("Rail %s: enable %s, %g V, %g A", rail, state, voltage, current)
            else:
                logger.warning("Supply rail %s not present on this device", rail)
        self.driver.analog_io_enable_set(handle, config.master_state)
        logger.info("Supplies master %s", "on" if config.master_state else "off")
        return programmed

    def close(self):
        """Reset the analog-IO instrument."""
        self.driver.analog_io_reset(self._handle())
        logger.info("Supplies reset")
