"""Pedal number mapping for the FCB1010."""


class PedalMapper:
    """
    Bidirectional mapping between logical indicator indices and pedal numbers.

    The FCB1010 numbers its pedals 1-10 on the panel, but the EurekaProm
    I/O mode addresses them 1-9 with pedal "10" wrapping to 0. The engine
    reports indicators 0-based in its own order:

    - physical_pedal_number(): logical index → value for the LED CC
    - pedal_index_from_controller_value(): pedal CC value → logical index

    Example:
        index 0 → pedal 1
        index 8 → pedal 9
        index 9 → pedal 0
        index 10 (UP) → 10
    """

    NUM_LED_PEDALS = 10
    UP = 10
    DOWN = 11

    @staticmethod
    def physical_pedal_number(logical_index: int) -> int:
        """
        Convert logical index to the pedal number used on the wire.

        Args:
            logical_index: Engine indicator index

        Returns:
            Pedal number; indices outside 0-9 pass through unchanged
        """
        if 0 <= logical_index <= 8:
            return logical_index + 1
        if logical_index == 9:
            return 0
        return logical_index

    @classmethod
    def pedal_index_from_controller_value(cls, value: int) -> int:
        """
        Convert a pedal's controller value to a logical index.

        Args:
            value: Controller value sent by the pedal board

        Returns:
            Logical index; values outside 0-11 pass through unchanged
        """
        if 1 <= value <= 9:
            return value - 1
        if value == 0:
            return 9
        if value == 10:
            return cls.UP
        if value == 11:
            return cls.DOWN
        return value
