"""
Evaluate a trained NeonShot agent, optionally against a random baseline.

    python -m rl.evaluate models/ppo/ppo_neonshot_final.zip \
        --vec-normalize models/ppo/vec_normalize.pkl --compare-random
"""

import argparse
from typing import Callable, Dict, Optional

import numpy as np

from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize

from neonshot import NeonShotEnv
from rl.configs.shooter_config import ENV_CONFIG
from rl.train import ALGOS, MultiDiscreteToDiscreteWrapper


def rollout(env, policy: Callable, n_episodes: int, seed: Optional[int] = None, verbose: int = 1) -> Dict:
    """Play n_episodes with policy(obs) -> action; returns per-episode outcomes"""
    rewards, scores, levels, wins = [], [], [], []
    for episode in range(n_episodes):
        obs, info = env.reset(seed=None if seed is None else seed + episode)
        total, steps, done = 0.0, 0, False
        while not done:
            obs, reward, terminated, truncated, info = env.step(policy(obs))
            total += reward
            steps += 1
            done = terminated or truncated

        rewards.append(total)
        scores.append(info["score"])
        levels.append(info["level"])
        wins.append(bool(info["won"]))
        if verbose > 0:
            print(f"Episode {episode + 1}/{n_episodes}: reward {total:.2f}, score {info['score']}, "
                  f"level {info['level']}, {steps} steps")

    return {
        "episode_rewards": rewards,
        "episode_scores": scores,
        "mean_reward": float(np.mean(rewards)),
        "mean_score": float(np.mean(scores)),
        "mean_level": float(np.mean(levels)),
        "win_rate": float(np.mean(wins)),
    }


def _summarize(title: str, results: Dict):
    print("\n" + "="*50)
    print(title)
    print(f"Mean Reward: {results['mean_reward']:.2f} ± {np.std(results['episode_rewards']):.2f}")
    print(f"Mean Score: {results['mean_score']:.0f}  Best Score: {max(results['episode_scores'])}")
    print(f"Mean Level: {results['mean_level']:.2f}  Win Rate: {results['win_rate']:.0%}")
    print("="*50)


def evaluate_model(
    model_path: str,
    algo: str = "ppo",
    n_episodes: int = 10,
    render: bool = True,
    seed: Optional[int] = None,
    vec_normalize_path: Optional[str] = None,
):
    """Run a saved model greedily; VecNormalize stats are applied when given"""
    if algo not in ALGOS:
        raise ValueError(f"Unknown algorithm: {algo}")
    model_cls, _, flatten, _ = ALGOS[algo]
    model = model_cls.load(model_path)

    env = NeonShotEnv(render_mode="human" if render else None, **ENV_CONFIG)
    if flatten:
        env = MultiDiscreteToDiscreteWrapper(env)

    norm = None
    if vec_normalize_path:
        # Only the observation statistics are used
        norm = VecNormalize.load(vec_normalize_path, DummyVecEnv([lambda: NeonShotEnv(**ENV_CONFIG)]))
        norm.training = False

    def policy(obs):
        if norm is not None:
            obs = norm.normalize_obs(obs)
        action, _ = model.predict(obs, deterministic=True)
        return action

    results = rollout(env, policy, n_episodes, seed)
    env.close()
    _summarize(f"{algo.upper()} ({n_episodes} episodes)", results)
    return results


def compare_with_random(n_episodes: int = 10, seed: Optional[int] = None, verbose: int = 0, **env_overrides):
    """Uniform random actions on the same env settings"""
    env = NeonShotEnv(**{**ENV_CONFIG, **env_overrides})
    env.action_space.seed(seed)
    results = rollout(env, lambda obs: env.action_space.sample(), n_episodes, seed, verbose=verbose)
    env.close()
    _summarize(f"Random policy ({n_episodes} episodes)", results)
    return results


def main():
    parser = argparse.ArgumentParser(description="Evaluate a trained NeonShot agent")
    parser.add_argument("model_path", type=str, help="Saved model (.zip)")
    parser.add_argument("--algo", type=str, default="ppo", choices=sorted(ALGOS),
                        help="Algorithm the model was trained with (default: ppo)")
    parser.add_argument("--n-episodes", type=int, default=10, help="Episodes to play (default: 10)")
    parser.add_argument("--no-render", action="store_true", help="Run without the arcade window")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--vec-normalize", type=str, default=None, help="VecNormalize stats saved by PPO training")
    parser.add_argument("--compare-random", action="store_true", help="Also play a random policy")
    args = parser.parse_args()

    results = evaluate_model(
        model_path=args.model_path,
        algo=args.algo,
        n_episodes=args.n_episodes,
        render=not args.no_render,
        seed=args.seed,
        vec_normalize_path=args.vec_normalize,
    )

    if args.compare_random:
        baseline = compare_with_random(n_episodes=args.n_episodes, seed=args.seed)
        print(f"\nScore over random: {results['mean_score'] - baseline['mean_score']:+.0f}")


if __name__ == "__main__":
    main()
