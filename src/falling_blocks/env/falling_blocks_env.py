from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Action, BoardAnalytics, GameSession, GameSettings, PieceGenerator


class EnvAction(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    NONE = 5


ENV_TO_GAME_ACTION = {
    EnvAction.LEFT: Action.MOVE_LEFT,
    EnvAction.RIGHT: Action.MOVE_RIGHT,
    EnvAction.ROTATE: Action.ROTATE,
    EnvAction.SOFT_DROP: Action.MOVE_DOWN,
    EnvAction.HARD_DROP: Action.HARD_DROP,
}


class FallingBlocksEnv(gym.Env):
    """
    Headless falling-block game driven one discrete action per step.

    Observation:
      board: int8 grid [y, x]; locked cells hold the piece type (1..7), the
             falling piece is overlaid as the negated type.
      piece / next_piece: piece type of the falling and preview piece, 0 when none.

    Reward is the engine score gained plus shaping terms from the stack shape.
    There is no gravity between steps; soft drop on a resting piece locks it.
    """

    metadata = {"render_modes": []}

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        reward_weights: Optional[Dict[str, float]] = None,
        max_episode_steps: int = 10000,
        terminal_penalty: float = 0.0,
    ) -> None:
        super().__init__()
        self.session = GameSession(settings)
        self.max_episode_steps = int(max_episode_steps)
        self.terminal_penalty = float(terminal_penalty)
        self.reward_weights: Dict[str, float] = {
            # Positive components
            "score": 0.01,           # per engine score point
            "lines": 1.0,            # per line cleared
            # Negative components (penalize increases)
            "holes": 0.1,
            "bumpiness": 0.01,
            "height": 0.02,
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        height = self.session.settings.board_height
        width = self.session.settings.board_width
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-7, high=7, shape=(height, width), dtype=np.int8),
                "piece": spaces.Discrete(8),
                "next_piece": spaces.Discrete(8),
            }
        )
        self.action_space = spaces.Discrete(len(EnvAction))
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        state = self.session.state
        assert state is not None
        board = state.board.to_array()
        piece = state.current_piece
        if piece is not None:
            for pos in piece.absolute_positions(state.current_position):
                if state.board.is_position_valid(pos):
                    board[pos.y, pos.x] = -int(piece.type)
        return {
            "board": board,
            "piece": int(piece.type) if piece is not None else 0,
            "next_piece": int(state.next_piece.type),
        }

    def _get_info(self) -> Dict[str, Any]:
        state = self.session.state
        assert state is not None
        return {
            "score": state.score,
            "lines_cleared": state.lines_cleared,
            "level": state.level,
            "ghost_y": self.session.ghost_y,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.session.generator = PieceGenerator(seed=seed)
        self.session.start()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        state_before = self.session.state
        assert state_before is not None, "call reset() before step()"
        features_before = BoardAnalytics.get_board_features(state_before.board)

        game_action = ENV_TO_GAME_ACTION.get(EnvAction(int(action)))
        if game_action is not None:
            self.session.dispatch(game_action)

        state = self.session.state
        assert state is not None
        features_after = BoardAnalytics.get_board_features(state.board)
        lines = state.lines_cleared - state_before.lines_cleared
        locked = state.board is not state_before.board

        reward_components: Dict[str, float] = {
            "score": self.reward_weights["score"] * float(state.score - state_before.score),
            "lines": self.reward_weights["lines"] * float(lines),
        }
        if locked:
            reward_components["holes"] = -self.reward_weights["holes"] * float(
                max(0, features_after["holes"] - features_before["holes"]))
            reward_components["bumpiness"] = -self.reward_weights["bumpiness"] * float(
                max(0, features_after["bumpiness"] - features_before["bumpiness"]))
            reward_components["height"] = -self.reward_weights["height"] * float(
                max(0, features_after["max_height"] - features_before["max_height"]))

        terminated = state.is_game_over
        if terminated:
            reward_components["terminal"] = self.terminal_penalty
        self._steps += 1
        truncated = not terminated and self._steps >= self.max_episode_steps

        reward = float(sum(reward_components.values()))
        info = self._get_info()
        info["reward_components"] = reward_components
        return self._get_obs(), reward, terminated, truncated, info

    def close(self) -> None:
        self.session.stop()
