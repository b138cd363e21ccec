"""
Tests for connectfour.game.rules.ConnectFourEnv.
"""

import numpy as np
import pytest

from connectfour.game.rules import ConnectFourEnv
from connectfour.utils import Player


def run_actions(env, actions):
    result = None
    for action in actions:
        result = env.step(action)
    return result


def test_reset_returns_empty_observation():
    env = ConnectFourEnv()

    observation, info = env.reset(seed=42)

    assert observation.shape == (6, 7)
    assert observation.dtype == np.int8
    assert not np.any(observation)
    assert env.observation_space.contains(observation)
    assert env.action_space.n == 7
    assert info['valid_moves'] == list(range(7))
    assert info['current_player'] == Player.RED.value
    assert info['game_result'] == 'IN_PROGRESS'
    assert info['moves_made'] == 0


def test_legal_step():
    env = ConnectFourEnv()
    env.reset()

    observation, reward, terminated, truncated, info = env.step(3)

    assert observation[5, 3] == Player.RED.value
    assert reward == pytest.approx(env.reward_step)
    assert not terminated
    assert not truncated
    assert info['current_player'] == Player.YELLOW.value
    assert info['last_move'] == (5, 3)


@pytest.mark.parametrize("action", [-1, 7])
def test_invalid_step_leaves_board_alone(action):
    env = ConnectFourEnv()
    env.reset()
    env.step(0)

    observation, reward, terminated, truncated, info = env.step(action)

    assert reward == pytest.approx(env.reward_invalid_move)
    assert not terminated
    assert truncated
    assert info['invalid_move'] == "Column out of bounds"
    assert info['moves_made'] == 1
    assert observation[5, 0] == Player.RED.value


def test_numpy_action_is_played():
    env = ConnectFourEnv()
    env.reset()

    observation, _, _, truncated, info = env.step(np.int64(4))

    assert not truncated
    assert info['last_move'] == (5, 4)
    assert observation[5, 4] == Player.RED.value


def test_fractional_action_is_rejected():
    env = ConnectFourEnv()
    env.reset()

    with pytest.raises(TypeError):
        env.step(1.7)

    assert env.game.move_count == 0


def test_red_win_rewards_red():
    env = ConnectFourEnv()
    env.reset()

    _, reward, terminated, _, info = run_actions(env, [1, 0, 1, 0, 1, 0, 1])

    assert terminated
    assert reward == pytest.approx(env.reward_win)
    assert info['game_result'] == 'WON'
    assert info['current_player'] == Player.EMPTY.value
    assert info['winning_line'] == [(2, 1), (3, 1), (4, 1), (5, 1)]
    assert info['valid_moves'] == []


def test_yellow_win_is_a_loss():
    env = ConnectFourEnv()
    env.reset()

    _, reward, terminated, _, _ = run_actions(env, [1, 0, 1, 0, 1, 0, 2, 0])

    assert terminated
    assert reward == pytest.approx(env.reward_lose)


def test_draw(draw_moves, draw_text):
    env = ConnectFourEnv(rows=4, columns=4, render_mode="ascii")
    env.reset()

    _, reward, terminated, _, info = run_actions(env, draw_moves)

    assert terminated
    assert reward == pytest.approx(env.reward_draw)
    assert info['game_result'] == 'DRAW'
    assert env.render() == draw_text


def test_step_after_game_over_is_invalid():
    env = ConnectFourEnv()
    env.reset()
    run_actions(env, [1, 0, 1, 0, 1, 0, 1])

    _, reward, _, truncated, info = env.step(3)

    assert truncated
    assert reward == pytest.approx(env.reward_invalid_move)
    assert info['invalid_move'] == "Game is over"


def test_reset_after_game_over():
    env = ConnectFourEnv()
    env.reset()
    run_actions(env, [1, 0, 1, 0, 1, 0, 1])

    observation, info = env.reset()

    assert not np.any(observation)
    assert info['game_result'] == 'IN_PROGRESS'


def test_human_render_prints(capsys):
    env = ConnectFourEnv(rows=4, columns=4, render_mode="human")
    env.reset()
    capsys.readouterr()

    env.step(0)

    assert "...." in capsys.readouterr().out


def test_unknown_render_mode():
    with pytest.raises(ValueError):
        ConnectFourEnv(render_mode="rgb_array")
