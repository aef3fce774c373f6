import numpy as np

from neonshot.adapters import SOUND_EVENTS
from neonshot.entities import Phase
from neonshot.env import NeonShotEnv

from factories import enemy_at

UP = 6  # aim index pointing at -y


def test_reset_observation_shape():
    env = NeonShotEnv(k_enemies=5, m_drops=2)
    obs, info = env.reset(seed=0)
    assert obs.shape == (9 + 5 * 5 + 2 * 2,)
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    assert info["score"] == 0
    assert info["lives"] == 3
    assert info["phase"] == "playing"
    env.close()


def test_random_rollout_stays_in_bounds():
    env = NeonShotEnv(max_steps=300)
    obs, _ = env.reset(seed=3)
    env.action_space.seed(3)
    for _ in range(300):
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        assert env.observation_space.contains(obs)
        assert isinstance(reward, float)
        assert set(env.audio.events) <= set(SOUND_EVENTS)
        if terminated or truncated:
            break
    env.close()


def test_shoot_action_fires_one_round():
    env = NeonShotEnv()
    env.reset(seed=1)
    _, reward, _, _, info = env.step(np.array([0, 1, UP]))
    assert info["num_projectiles"] == 1
    p = env.state.store.projectiles[0]
    assert p.vy < 0
    assert reward < 0  # shot and time costs only
    env.close()


def test_cooldown_blocks_second_shot():
    env = NeonShotEnv()
    env.reset(seed=1)
    env.step(np.array([0, 1, UP]))
    _, _, _, _, info = env.step(np.array([0, 1, UP]))
    assert info["num_projectiles"] == 1
    env.close()


def test_fixed_player_ignores_moves():
    env = NeonShotEnv()
    env.reset(seed=1)
    env.step(np.array([3, 0, 0]))
    assert env.state.player.pos == (400, 300)
    env.close()


def test_movable_player():
    env = NeonShotEnv(movable_player=True, player_speed=4.0)
    env.reset(seed=1)
    env.step(np.array([4, 0, 0]))
    assert env.state.player.pos == (404, 300)
    env.close()


def test_last_life_terminates():
    env = NeonShotEnv()
    env.reset(seed=2)
    env.state.progression.lives = 1
    env.state.store.enemies.append(enemy_at(410, 300))
    _, reward, terminated, truncated, info = env.step(np.array([0, 0, 0]))
    assert terminated
    assert not truncated
    assert info["phase"] == "game_over"
    assert reward < -10
    env.close()


def test_level_transition_skipped():
    env = NeonShotEnv()
    env.reset(seed=2)
    env.state.progression.score = 1450
    env.state.store.enemies.append(enemy_at(400, 240))
    env.step(np.array([0, 1, UP]))
    # the round needs a few frames to reach the enemy
    for _ in range(10):
        _, reward, _, _, info = env.step(np.array([0, 0, 0]))
        if info["level"] == 2:
            break
    assert info["level"] == 2
    assert info["kills"] == 1
    assert env.state.phase is Phase.PLAYING
    assert reward > 5
    env.close()


def test_truncates_at_max_steps():
    env = NeonShotEnv(max_steps=5)
    env.reset(seed=0)
    for i in range(5):
        _, _, terminated, truncated, _ = env.step(np.array([0, 0, 0]))
    assert truncated
    assert not terminated
    env.close()


def test_same_seed_same_rollout():
    def rollout(seed):
        env = NeonShotEnv()
        env.reset(seed=seed)
        env.action_space.seed(seed)
        scores = []
        for _ in range(200):
            _, _, terminated, truncated, info = env.step(env.action_space.sample())
            scores.append((info["score"], info["num_enemies"]))
            if terminated or truncated:
                break
        env.close()
        return scores

    assert rollout(11) == rollout(11)


def test_reward_config_overrides_only_reward_keys():
    env = NeonShotEnv(reward_config={"name": "custom", "R_TIME": 0.5})
    assert env.reward_config["R_TIME"] == 0.5
    assert "name" not in env.reward_config


def test_contact_damage_penalised_from_collision_report():
    env = NeonShotEnv(reward_config={"R_DEATH": 0.0, "R_TIME": 0.0})
    env.reset(seed=2)
    env.state.store.enemies.append(enemy_at(410, 300))
    _, reward, terminated, _, info = env.step(np.array([0, 0, 0]))
    assert not terminated
    assert info["lives"] == 2
    assert info["kills"] == 0
    assert reward == -env.reward_config["R_DAMAGE"]
