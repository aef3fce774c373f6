"""
Training configuration for the NeonShot environment
Reward shaping variants and algorithm hyperparameters
"""

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training - it's too slow with parallel envs
    "width": 800,
    "height": 600,
    "frame_interval": 1/60,
    "max_steps": 3600,  # 60 seconds at 60 FPS
    "k_enemies": 5,
    "m_drops": 2,
    "enemy_motion": "pursuit",
    "movable_player": False,
    "skip_transitions": True,
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# ==============================================================================

# Reward Config 1: BASELINE (score-driven)
REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Score-driven shaping with a small shot cost",
    "R_SCORE": 0.01,     # Per score point (basic kill = 1.0)
    "R_HIT": 0.1,        # Reward for any projectile hit
    "R_PICKUP": 0.5,     # Reward for collecting a weapon drop
    "R_DAMAGE": 2.0,     # Penalty per life lost
    "R_LEVEL": 5.0,      # Bonus for clearing a level
    "R_WIN": 20.0,       # Bonus for clearing the final level
    "R_SHOT": 0.01,      # Penalty per projectile volley
    "R_TIME": 0.001,     # Small time penalty
    "R_DEATH": 10.0,     # Game over penalty
}

# Reward Config 2: SURVIVAL (keep the enemies off the player)
REWARD_CONFIG_SURVIVAL = {
    "name": "survival",
    "description": "Heavier life-loss penalties, lower score reward",
    "R_SCORE": 0.005,
    "R_HIT": 0.05,
    "R_PICKUP": 0.25,
    "R_DAMAGE": 5.0,
    "R_LEVEL": 5.0,
    "R_WIN": 20.0,
    "R_SHOT": 0.005,
    "R_TIME": 0.0,
    "R_DEATH": 20.0,
}

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "survival": REWARD_CONFIG_SURVIVAL,
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

# PPO hyperparameters
PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 2048,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

# DQN hyperparameters
DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.99,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 1_000_000,
    "save_freq": 20_000,
    "eval_freq": 10_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}
