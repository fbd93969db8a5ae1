from __future__ import annotations

import argparse
import logging
import random
from typing import Optional

import gymnasium as gym

import edge_shift_puzzle.env  # noqa: F401  ensure registration
from edge_shift_puzzle.env.wrappers import FlattenDiscreteActionWrapper, ResampleInvalidActionWrapper


logger = logging.getLogger(__name__)


def build_env() -> gym.Env:
    env = gym.make("EdgeShift-12x12-v0")
    env = FlattenDiscreteActionWrapper(env)
    return ResampleInvalidActionWrapper(env)


def run_random(steps: int = 200, seed: Optional[int] = None) -> float:
    env = build_env()
    picker = random.Random(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        action = picker.randrange(env.action_space.n)
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            logger.info("episode %d finished with score %d", episodes, info["score"])
            obs, info = env.reset()
    env.close()
    logger.info("random agent total reward: %.2f over %d steps", total_reward, steps)
    return total_reward


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", default="INFO")
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    total_reward = run_random(steps=args.steps, seed=args.seed)
    print(f"Random agent total reward: {total_reward:.2f}")


if __name__ == "__main__":  # pragma: no cover
    main()
