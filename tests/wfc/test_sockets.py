from __future__ import annotations

from tilewave.wfc.sockets import DIR_OFFSETS, DIRECTIONS, OPPOSITE_DIR, Direction, Socket


def test_opposite_is_two_steps_round() -> None:
    for direction in DIRECTIONS:
        assert OPPOSITE_DIR[direction] == (direction + 2) % 4
        assert OPPOSITE_DIR[OPPOSITE_DIR[direction]] == direction
    assert Direction.UP.opposite() is Direction.DOWN
    assert Direction.LEFT.opposite() is Direction.RIGHT


def test_offsets_cancel_with_opposite() -> None:
    for direction in DIRECTIONS:
        dx, dy = DIR_OFFSETS[direction]
        ox, oy = DIR_OFFSETS[direction.opposite()]
        assert (dx + ox, dy + oy) == (0, 0)


def test_socket_indexing_follows_direction_order() -> None:
    socket = Socket("u", "r", "d", "l")
    assert [socket[d] for d in DIRECTIONS] == ["u", "r", "d", "l"]
    assert list(socket) == ["u", "r", "d", "l"]
    assert len(socket) == 4


def test_connects_compares_touching_edges() -> None:
    left = Socket(0, "pipe", 0, 0)
    right = Socket(1, 1, 1, "pipe")
    assert left.connects(right, Direction.RIGHT)
    assert right.connects(left, Direction.LEFT)
    assert not left.connects(right, Direction.LEFT)
    assert not left.connects(right, Direction.UP)


def test_boolean_sockets() -> None:
    solid = Socket.uniform(True)
    assert solid.connects(solid, Direction.DOWN)
    assert not solid.connects(Socket.uniform(False), Direction.DOWN)
