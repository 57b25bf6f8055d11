def by_name(packets, name):
    return [pkt['args'][0] for pkt in packets if pkt['name'] == name]


def seat_pair(sio_factory, code='ABCD'):
    red, blue = sio_factory(), sio_factory()
    red.emit('join', code)
    blue.emit('join', code)
    red.get_received()
    blue.get_received()
    return red, blue


def test_socket_connect_and_join(sio_factory, received):
    player = sio_factory()
    assert player.is_connected()

    player.emit('join', 'abcd')
    [init] = received(player, 'init')
    assert init['seat'] == 0
    assert init['side'] == 'red'
    assert init['roomCode'] == 'ABCD'
    assert init['turn'] == 'red'
    assert init['winner'] is None
    assert init['board'][0] == [1, 1, 3, 1, 1]
    assert init['board'][4] == [2, 2, 4, 2, 2]


def test_join_accepts_object_payload(sio_factory, received):
    player = sio_factory()
    player.emit('join', {'roomCode': ' wxyz '})
    [init] = received(player, 'init')
    assert init['roomCode'] == 'WXYZ'


def test_second_player_is_announced(sio_factory):
    red, blue = sio_factory(), sio_factory()
    red.emit('join', 'ABCD')
    red.get_received()

    blue.emit('join', 'ABCD')
    [init] = by_name(blue.get_received(), 'init')
    assert init['seat'] == 1
    assert init['side'] == 'blue'
    assert by_name(red.get_received(), 'playerJoined') == [{'seat': 1}]


def test_scenario_d_invalid_code(sio_factory, received, rooms):
    player = sio_factory()
    player.emit('join', 'AB')
    assert received(player, 'error') == [{'message': 'Invalid room code', 'code': 'invalid_room_code'}]
    assert rooms.room_count() == 0


def test_room_full(sio_factory, received):
    seat_pair(sio_factory)
    third = sio_factory()
    third.emit('join', 'ABCD')
    packets = third.get_received()
    assert by_name(packets, 'init') == []
    assert by_name(packets, 'error')[0]['code'] == 'room_full'


def test_move_broadcasts_update(sio_factory):
    red, blue = seat_pair(sio_factory)
    red.emit('move', {'from': [0, 0], 'to': [1, 1]})

    for player in (red, blue):
        [update] = by_name(player.get_received(), 'update')
        assert update['turn'] == 'blue'
        assert update['winner'] is None
        assert update['lastMove'] == {'from': [0, 0], 'to': [1, 1]}
        assert update['board'][0][0] == 0
        assert update['board'][1][1] == 1


def test_scenario_c_out_of_turn(sio_factory, rooms):
    red, blue = seat_pair(sio_factory)
    blue.emit('move', {'from': [4, 0], 'to': [3, 0]})
    assert by_name(blue.get_received(), 'error')[0]['code'] == 'not_your_turn'
    # the opponent hears nothing
    assert red.get_received() == []
    assert rooms.get('ABCD').board[4][0] == 2


def test_illegal_and_malformed_moves(sio_factory):
    red, _ = seat_pair(sio_factory)
    for payload in (
        {'from': [0, 0], 'to': [2, 1]},
        {'from': [0, 0]},
        {'from': ['a', 0], 'to': [1, 0]},
        {'from': [0, 0], 'to': [7, 7]},
        'nonsense',
    ):
        red.emit('move', payload)
        errors = by_name(red.get_received(), 'error')
        assert [e['code'] for e in errors] == ['illegal_move']


def test_move_without_room(sio_factory, received):
    player = sio_factory()
    player.emit('move', {'from': [0, 0], 'to': [1, 1]})
    assert received(player, 'error')[0]['code'] == 'no_active_room'


def test_scenario_a_win_ends_the_game(sio_factory):
    red, blue = seat_pair(sio_factory)
    red.emit('move', {'from': [0, 2], 'to': [2, 2]})
    [update] = by_name(blue.get_received(), 'update')
    assert update['winner'] == 'red'
    assert update['board'][2][2] == 3
    red.get_received()

    blue.emit('move', {'from': [4, 0], 'to': [3, 0]})
    assert by_name(blue.get_received(), 'error')[0]['code'] == 'not_your_turn'


def test_scenario_e_disconnect_frees_seat(sio_factory, rooms):
    red, blue = seat_pair(sio_factory)
    red.disconnect()
    assert by_name(blue.get_received(), 'playerLeft') == [{'seat': 0}]
    assert rooms.get('ABCD').occupants != []

    newcomer = sio_factory()
    newcomer.emit('join', 'ABCD')
    [init] = by_name(newcomer.get_received(), 'init')
    assert init['seat'] == 0
    assert init['side'] == 'red'
    assert by_name(blue.get_received(), 'playerJoined') == [{'seat': 0}]


def test_last_disconnect_deletes_room(sio_factory, rooms):
    red, blue = seat_pair(sio_factory)
    red.disconnect()
    blue.disconnect()
    assert rooms.get('ABCD') is None
    assert rooms.room_count() == 0


def test_rooms_are_isolated(sio_factory):
    red, blue = seat_pair(sio_factory, 'ROOM1')
    other_red, other_blue = seat_pair(sio_factory, 'ROOM2')

    red.emit('move', {'from': [0, 0], 'to': [1, 1]})
    assert by_name(blue.get_received(), 'update')
    assert other_red.get_received() == []
    assert other_blue.get_received() == []


def test_switching_rooms_notifies_old_opponent(sio_factory):
    red, blue = seat_pair(sio_factory)
    blue.emit('join', 'WXYZ')
    [init] = by_name(blue.get_received(), 'init')
    assert init['roomCode'] == 'WXYZ'
    assert by_name(red.get_received(), 'playerLeft') == [{'seat': 1}]


def test_rejoin_same_room_is_not_announced(sio_factory):
    red, blue = seat_pair(sio_factory)
    blue.emit('join', 'abcd')
    [init] = by_name(blue.get_received(), 'init')
    assert init['seat'] == 1
    assert red.get_received() == []


def test_disconnect_fault_is_logged_not_raised(sio_factory, rooms, monkeypatch):
    red, blue = seat_pair(sio_factory)

    def broken_leave(sid):
        raise RuntimeError('boom')

    monkeypatch.setattr(rooms, 'leave', broken_leave)
    red.disconnect()
    assert not red.is_connected()
    assert blue.get_received() == []
