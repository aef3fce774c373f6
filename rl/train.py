"""
Train an agent on NeonShot with Stable-Baselines3.

    python -m rl.train --algo ppo --n-envs 8
    python -m rl.train --algo dqn --timesteps 300000 --reward survival

PPO acts on the MultiDiscrete action space directly; DQN gets the flattened
80-action version. Episode outcomes (score, level, win) are written to CSV.
"""

import os
import argparse
from typing import Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize
from stable_baselines3.common.callbacks import CheckpointCallback, EvalCallback
from stable_baselines3.common.monitor import Monitor

from neonshot import NeonShotEnv
from neonshot.utils import seed_everything
from rl.configs.shooter_config import ENV_CONFIG, PPO_CONFIG, DQN_CONFIG, TRAINING_CONFIG, REWARD_CONFIGS
from rl.metrics_callback import MetricsCallback, TensorboardMetricsCallback

# algo -> (model class, hyperparameters, flatten actions, normalize observations)
ALGOS = {
    "ppo": (PPO, PPO_CONFIG, False, True),
    "dqn": (DQN, DQN_CONFIG, True, False),
}

EVAL_SEED = 100


class MultiDiscreteToDiscreteWrapper(gym.ActionWrapper):
    """
    Exposes a MultiDiscrete action space as a single Discrete one.
    Index i decodes to the mixed-radix digits of i, last dimension fastest.
    """

    def __init__(self, env):
        super().__init__(env)
        self._nvec = [int(n) for n in env.action_space.nvec]
        self.action_space = spaces.Discrete(int(np.prod(self._nvec)))

    def action(self, action):
        digits = []
        rest = int(action)
        for n in self._nvec[::-1]:
            rest, d = divmod(rest, n)
            digits.append(d)
        return np.array(digits[::-1], dtype=np.int64)


def make_env(render_mode: Optional[str] = None, seed: Optional[int] = None,
             reward: str = "baseline", wrap_for_dqn: bool = False):
    """Thunk building one monitored env, for DummyVecEnv"""
    def _init():
        env = NeonShotEnv(render_mode=render_mode, reward_config=REWARD_CONFIGS[reward], **ENV_CONFIG)
        if wrap_for_dqn:
            env = MultiDiscreteToDiscreteWrapper(env)
        env = Monitor(env, info_keywords=("score", "level", "won"))
        if seed is not None:
            env.reset(seed=seed)
        return env
    return _init


def _vec_envs(algo: str, n_envs: int, reward: str):
    _, _, flatten, normalize = ALGOS[algo]
    env = DummyVecEnv([make_env(seed=i, reward=reward, wrap_for_dqn=flatten) for i in range(n_envs)])
    eval_env = DummyVecEnv([make_env(seed=EVAL_SEED, reward=reward, wrap_for_dqn=flatten)])
    if normalize:
        env = VecNormalize(env, norm_obs=True, norm_reward=True)
        eval_env = VecNormalize(eval_env, norm_obs=True, norm_reward=False, training=False)
    return env, eval_env


def _callbacks(algo: str, eval_env, save_dir: str, log_dir: str, n_envs: int = 1):
    per_env = lambda steps: max(1, steps // n_envs)  # noqa: E731
    metrics = MetricsCallback(log_dir=log_dir, algo_name=algo, verbose=1)
    callbacks = [
        CheckpointCallback(
            save_freq=per_env(TRAINING_CONFIG["save_freq"]),
            save_path=save_dir,
            name_prefix=f"{algo}_neonshot",
        ),
        EvalCallback(
            eval_env,
            best_model_save_path=save_dir,
            log_path=log_dir,
            eval_freq=per_env(TRAINING_CONFIG["eval_freq"]),
            deterministic=True,
            render=False,
        ),
        metrics,
        TensorboardMetricsCallback(),
    ]
    return metrics, callbacks


def _report(algo: str, final_path: str, metrics: MetricsCallback):
    print(f"\n{'='*60}")
    print(f"{algo.upper()} finished, model at {final_path}")
    summary = metrics.get_summary()
    if summary:
        print(f"Episodes: {summary['total_episodes']}  "
              f"Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
        print(f"Mean Score: {summary['mean_score']:.0f}  Max Level: {summary['max_level']}  "
              f"Win Rate: {summary['win_rate']:.1%}")
    print(f"{'='*60}\n")


def train(
    algo: str = "ppo",
    total_timesteps: Optional[int] = None,
    n_envs: int = 4,
    reward: str = "baseline",
    out_root: str = ".",
):
    """Train one agent; returns (model, metrics callback)"""
    if algo not in ALGOS:
        raise ValueError(f"Unknown algorithm: {algo}")
    model_cls, hyper, flatten, normalize = ALGOS[algo]
    if flatten:
        n_envs = 1  # off-policy replay; one env is enough
    total_timesteps = total_timesteps or TRAINING_CONFIG["total_timesteps"]

    save_dir = os.path.join(out_root, TRAINING_CONFIG["model_dir"], algo)
    log_dir = os.path.join(out_root, TRAINING_CONFIG["log_dir"], algo)
    tb_dir = os.path.join(out_root, TRAINING_CONFIG["tensorboard_log"], algo)
    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"{algo.upper()}: {total_timesteps:,} steps, {n_envs} env(s), reward '{reward}'")
    if flatten:
        print("Actions flattened to a single Discrete space")
    print(f"{'='*60}\n")

    env, eval_env = _vec_envs(algo, n_envs, reward)
    metrics, callbacks = _callbacks(algo, eval_env, save_dir, log_dir, n_envs)

    model = model_cls(env=env, tensorboard_log=tb_dir, **hyper)
    model.learn(total_timesteps=total_timesteps, callback=callbacks)

    final_path = os.path.join(save_dir, f"{algo}_neonshot_final")
    model.save(final_path)
    if normalize:
        env.save(os.path.join(save_dir, "vec_normalize.pkl"))

    _report(algo, final_path, metrics)
    return model, metrics


def main():
    parser = argparse.ArgumentParser(description="Train an RL agent on NeonShot")
    parser.add_argument("--algo", type=str, default="ppo", choices=sorted(ALGOS),
                        help="Algorithm (default: ppo)")
    parser.add_argument("--timesteps", type=int, default=None,
                        help=f"Training steps (default: {TRAINING_CONFIG['total_timesteps']:,})")
    parser.add_argument("--n-envs", type=int, default=4,
                        help="Parallel envs, PPO only (default: 4)")
    parser.add_argument("--reward", type=str, default="baseline", choices=sorted(REWARD_CONFIGS),
                        help="Reward shaping preset (default: baseline)")
    parser.add_argument("--out", type=str, default=".",
                        help="Root folder for models/, logs/ and tensorboard_logs/")
    parser.add_argument("--seed", type=int, default=0, help="Global random seed (default: 0)")
    args = parser.parse_args()

    seed_everything(args.seed)
    train(args.algo, args.timesteps, n_envs=args.n_envs, reward=args.reward, out_root=args.out)


if __name__ == "__main__":
    main()
