"""
NeonShot command line

    python -m neonshot play              # arcade window, mouse aim, click to fire
    python -m neonshot play --autofire   # turret fires at the nearest enemy
    python -m neonshot demo --seed 42    # headless auto-aim run, prints a summary
"""

import argparse

from .adapters import AutoAim, RecordingAudio
from .config import GAME_CONFIG
from .entities import Phase
from .loop import LoopDriver
from .scheduler import ManualScheduler
from .store import new_state


def run_demo(seconds: float = 120.0, seed=None, enemy_motion: str = GAME_CONFIG["enemy_motion"], verbose: int = 1):
    """Play a headless auto-aim game on a virtual clock"""
    state = new_state(enemy_motion=enemy_motion, seed=seed)
    scheduler = ManualScheduler()
    audio = RecordingAudio()
    driver = LoopDriver(state, scheduler, audio=audio, aim=AutoAim(), autofire=True, verbose=verbose)

    frame = GAME_CONFIG["frame_interval"]
    with driver.running():
        while scheduler.time() < seconds and state.phase is not Phase.GAME_OVER:
            scheduler.advance(frame)

    prog = state.progression
    print(f"\n{'='*50}")
    print(f"Demo finished after {scheduler.time():.1f}s ({state.tick} ticks)")
    print(f"Score: {prog.score}  Level: {prog.level}  Lives: {prog.lives}  Won: {prog.won}")
    print(f"Shots: {sum(audio.count(e) for e in ('shoot_default', 'shoot_shotgun', 'shoot_pierce'))}  "
          f"Kills: {audio.count('explode')}  Pickups: {audio.count('pickup')}")
    print(f"{'='*50}")
    return prog


def main():
    parser = argparse.ArgumentParser(description="NeonShot top-down shooter")
    sub = parser.add_subparsers(dest="command", required=True)

    play_p = sub.add_parser("play", help="Open the game window")
    play_p.add_argument("--autofire", action="store_true", help="Fire at the nearest enemy automatically")
    play_p.add_argument("--fixed", action="store_true", help="Enemies keep their spawn heading instead of homing")
    play_p.add_argument("--seed", type=int, default=None, help="Random seed")

    demo_p = sub.add_parser("demo", help="Run a headless auto-aim game")
    demo_p.add_argument("--seconds", type=float, default=120.0, help="Virtual seconds to simulate (default: 120)")
    demo_p.add_argument("--fixed", action="store_true", help="Enemies keep their spawn heading instead of homing")
    demo_p.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")

    args = parser.parse_args()
    enemy_motion = "fixed" if args.fixed else "pursuit"

    if args.command == "play":
        from .render import play
        play(enemy_motion=enemy_motion, autofire=args.autofire, seed=args.seed)
    else:
        run_demo(seconds=args.seconds, seed=args.seed, enemy_motion=enemy_motion)


if __name__ == "__main__":
    main()
