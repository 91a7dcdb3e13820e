"""
env.py - Gymnasium environment with the search engine as opponent

The agent plays one side; after each agent move the SearchEngine answers for
the other side within the same step(). Observations are the board grid with
0 for empty, 1 and 2 for the players' tokens.
"""

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from standalone_connect4.ai.search import SearchEngine
from standalone_connect4.config import EngineConfig
from standalone_connect4.debug import debug
from standalone_connect4.game import rules
from standalone_connect4.game.board import Board
from standalone_connect4.utils import COLS, ROWS, GameResult, Player


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    The opponent searches to ``opponent_depth`` plies.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None,
                 agent_player: Player = Player.ONE,
                 opponent_depth: int = 2,
                 config: Optional[EngineConfig] = None,
                 width: int = COLS, height: int = ROWS):
        """
        Initialize the environment.

        Args:
            render_mode: "ascii" returns the board string, "human" prints it
            agent_player: Side played by the agent
            opponent_depth: Search depth of the engine opponent
            config: Engine configuration for the opponent
            width: Number of columns
            height: Number of rows
        """
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")
        if agent_player == Player.EMPTY:
            raise ValueError("agent_player must be Player.ONE or Player.TWO")

        self.render_mode = render_mode
        self.agent_player = agent_player
        self.opponent_depth = opponent_depth
        self.engine = SearchEngine(config)
        self.board = Board(width, height)

        self.action_space = spaces.Discrete(width)
        self.observation_space = spaces.Box(low=0, high=2, shape=(height, width), dtype=np.int8)

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01  # Small negative reward to encourage faster wins

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        self.board.reset()
        self.engine.clear_table()

        if self.agent_player == Player.TWO:
            self._opponent_move()

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        """
        Play the agent's move, then the engine's reply.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        if rules.game_result(self.board).is_game_over():
            raise RuntimeError("step() called on a finished episode; call reset()")

        if not rules.is_legal(self.board, int(action)):
            debug.debug(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        self.board.drop(int(action))
        result = rules.game_result(self.board)
        if not result.is_game_over():
            self._opponent_move()
            result = rules.game_result(self.board)

        reward = self._reward(result)
        terminated = result.is_game_over()
        if terminated:
            debug.info(f"Episode finished: {result.name}", "env")

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def _opponent_move(self) -> None:
        found = self.engine.search(self.board, max_depth=self.opponent_depth)
        self.board.drop(found.column)

    def _reward(self, result: GameResult) -> float:
        if result == GameResult.DRAW:
            return self.reward_draw
        if result.winner == self.agent_player:
            return self.reward_win
        if result.winner is not None:
            return self.reward_lose
        return self.reward_step

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.board.render()
        if self.render_mode == "human":
            print(self.board.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.board.get_state()

    def _get_info(self) -> Dict[str, Any]:
        valid_moves = rules.legal_moves(self.board)
        return {
            'valid_moves': sorted(valid_moves),
            'current_player': self.board.current_player.value,
            'game_result': rules.game_result(self.board).name,
            'moves_made': self.board.move_count,
            'winning_line': rules.winning_line(self.board),
            'last_move': self.board.last_move,
        }
