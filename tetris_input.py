
"""Key mapping and DAS/ARR controller"""
from typing import Dict, List, Optional
import pygame
from tetris_config import CONFIG
from tetris_session import Command

# One-shot commands fired on KEYDOWN; left/right go through ShiftRepeat
KEYMAP: Dict[int, Command] = {
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_SPACE: Command.HARD_DROP,
    pygame.K_UP: Command.ROTATE_CW,
    pygame.K_x: Command.ROTATE_CW,
    pygame.K_z: Command.ROTATE_CCW,
    pygame.K_c: Command.HOLD,
    pygame.K_LESS: Command.TOGGLE_FAST_SHIFT,
    pygame.K_HOME: Command.MOVE_LEFT_MAX,
    pygame.K_END: Command.MOVE_RIGHT_MAX,
    pygame.K_q: Command.QUIT,
    pygame.K_ESCAPE: Command.QUIT,
}

# Matched on the typed character; "<" is Shift+comma on many layouts
CHARMAP: Dict[str, Command] = {
    "<": Command.TOGGLE_FAST_SHIFT,
}

def command_for(e) -> Optional[Command]:
    cmd = CHARMAP.get(getattr(e, "unicode", ""))
    if cmd is not None:
        return cmd
    return KEYMAP.get(e.key)

class ShiftRepeat:
    """Turns held left/right keys into MOVE_LEFT / MOVE_RIGHT commands.

    The first step is immediate, then nothing until DAS_MS has passed, then
    one step every ARR_MS (every frame when ARR_MS is 0).
    """
    def __init__(self):
        self.dir=0; self.held_ms=0; self.last=0; self.initial=False
    def update(self, dt, left, right) -> int:
        nd=(-1 if left else 0)+(1 if right else 0)
        if nd!=self.dir:
            self.dir=nd; self.held_ms=0; self.last=0; self.initial=False
        if self.dir==0: return 0
        self.held_ms+=dt
        if not self.initial:
            self.initial=True; return self.dir
        if self.held_ms < CONFIG["DAS_MS"]: return 0
        arr=CONFIG["ARR_MS"]
        if arr==0: return self.dir
        self.last+=dt
        if self.last>=arr:
            self.last=0; return self.dir
        return 0
    def commands(self, dt, left, right) -> List[Command]:
        step=self.update(dt, left, right)
        if step<0: return [Command.MOVE_LEFT]
        if step>0: return [Command.MOVE_RIGHT]
        return []
