import logging
import pygame
from tetris_config import CONFIG
from tetris_input import ShiftRepeat, command_for
from tetris_layout import compute_dims
from tetris_overlay import Overlay
from tetris_render import RenderAssets
from tetris_session import Command, Session, Status, Tick

log = logging.getLogger(__name__)


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except TypeError:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def main():
    logging.basicConfig(level=CONFIG["LOG_LEVEL"], format="[TETRIS] %(asctime)s %(name)s - %(message)s")
    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, pygame.KEYUP])

    session = Session()
    dims = compute_dims(session.cols, session.rows)
    screen = recreate_window(dims)
    pygame.display.set_caption("Tetris")
    font = pygame.font.SysFont(None, 22)
    big_font = pygame.font.SysFont(None, 36)

    render = RenderAssets(dims, font, big_font)
    clock = pygame.time.Clock()
    shift = ShiftRepeat()
    overlay = Overlay()

    while not session.quit_requested:
        dt = clock.tick_busy_loop(60)

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                session.dispatch(Command.QUIT)
                break
            if e.type != pygame.KEYDOWN:
                continue
            if e.key == pygame.K_F1:
                overlay.toggle(); continue
            if overlay.active:
                overlay.handle(e); continue
            if e.key == pygame.K_RETURN and session.status is Status.IDLE:
                session.start(pygame.time.get_ticks())
            elif e.key == pygame.K_r:
                # a fresh session picks up overlay edits
                session = Session()
                session.start(pygame.time.get_ticks())
            else:
                cmd = command_for(e)
                if cmd is not None:
                    session.dispatch(cmd)

        if session.quit_requested:
            break

        if not overlay.active:
            keys = pygame.key.get_pressed()
            for cmd in shift.commands(dt, keys[pygame.K_LEFT], keys[pygame.K_RIGHT]):
                session.dispatch(cmd)
            session.dispatch(Tick(pygame.time.get_ticks()))

        render.draw(screen, session.snapshot())
        overlay.draw(screen, font, dims.total_w, dims.total_h)
        pygame.display.flip()

    log.info("quit with score %d", session.score)
    pygame.quit()


if __name__ == '__main__':
    main()
