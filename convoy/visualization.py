"""
Pygame Visualization: Player-Centred Top-Down View
"""
import os

import pygame


class PygameVisualization:
    """
    Real-time pygame view that follows the player car.
    """

    def __init__(self, state, input_state, config):
        """
        Initialize pygame visualization.

        Args:
            state: SimulationState to draw
            input_state: InputState fed from keyboard events
            config: SimulationConfig with display settings
        """
        self.state = state
        self.input_state = input_state
        self.config = config
        self.width = config.display_width
        self.height = config.display_height
        self.show_bounding_boxes = config.show_bounding_boxes

        try:
            # Set environment variable to prevent pygame from trying to use audio
            os.environ['SDL_AUDIODRIVER'] = 'dummy'
            pygame.init()

            self.screen = pygame.display.set_mode((self.width, self.height))
            pygame.display.set_caption("Convoy Driving Simulation")
            self.clock = pygame.time.Clock()
            self.font = pygame.font.Font(None, 24)
            self.small_font = pygame.font.Font(None, 18)
            print(f"Pygame window created: {self.width}x{self.height}")

            pygame.display.flip()
        except Exception as e:
            print(f"Error initializing pygame: {e}")
            pygame.quit()
            raise

        self.colors = {
            'background': (255, 255, 255),
            'road': (70, 70, 70),
            'road_edge': (200, 200, 200),
            'lane_marking': (230, 210, 60),
            'player': (220, 40, 40),
            'follower': (40, 110, 220),
            'collision': (255, 255, 0),
            'windshield': (180, 220, 255),
            'bounding_box': (0, 255, 0),
            'text': (255, 255, 255),
        }

        # Camera offset, recomputed each frame so the player stays centred
        self.offset_x = 0.0
        self.offset_y = 0.0

    def _update_camera(self):
        player = self.state.player
        self.offset_x = self.width / 2 - player.x
        self.offset_y = self.height / 2 - player.y

    def world_to_screen(self, x, y):
        """Convert world coordinates to screen coordinates."""
        return int(x + self.offset_x), int(y + self.offset_y)

    def draw_road(self):
        """Draw a strip of road tiles that scrolls with the camera."""
        tile = self.config.road_tile
        first = int(-self.offset_x // tile) - 1
        last = int((self.width - self.offset_x) // tile) + 1
        top = self.offset_y

        for i in range(first, last + 1):
            left = i * tile + self.offset_x
            pygame.draw.rect(self.screen, self.colors['road'], (left, top, tile, tile))
            pygame.draw.line(self.screen, self.colors['road_edge'], (left, top), (left + tile, top), 3)
            pygame.draw.line(self.screen, self.colors['road_edge'],
                             (left, top + tile), (left + tile, top + tile), 3)
            # Dashed centre line
            mid = top + tile / 2
            pygame.draw.line(self.screen, self.colors['lane_marking'],
                             (left + tile * 0.1, mid), (left + tile * 0.4, mid), 2)
            pygame.draw.line(self.screen, self.colors['lane_marking'],
                             (left + tile * 0.6, mid), (left + tile * 0.9, mid), 2)

    def draw_car(self, car):
        """Draw a single car as the filled rectangle of its bounding box."""
        if car.collision_flag:
            color = self.colors['collision']
        elif car.is_player:
            color = self.colors['player']
        else:
            color = self.colors['follower']

        box = car.bounding_box
        points = [self.world_to_screen(p.x, p.y) for p in box.corners()]
        pygame.draw.polygon(self.screen, color, points)

        # Front edge marks the direction of travel
        front = [self.world_to_screen(p.x, p.y) for p in (box.front.p1, box.front.p2)]
        pygame.draw.line(self.screen, self.colors['windshield'], front[0], front[1], 3)

        if self.show_bounding_boxes:
            for edge in box.edges():
                pygame.draw.line(self.screen, self.colors['bounding_box'],
                                 self.world_to_screen(edge.p1.x, edge.p1.y),
                                 self.world_to_screen(edge.p2.x, edge.p2.y), 1)

    def draw_stats(self, collisions):
        """Draw statistics overlay."""
        panel = pygame.Surface((220, 90), pygame.SRCALPHA)
        panel.fill((0, 0, 0, 200))
        self.screen.blit(panel, (10, 10))

        player = self.state.player
        stats = [
            f"Step: {self.state.step_count}",
            f"Speed: {player.velocity:.2f}",
            f"Collisions: {collisions}",
        ]
        for i, stat in enumerate(stats):
            text = self.small_font.render(stat, True, self.colors['text'])
            self.screen.blit(text, (20, 20 + i * 25))

    def render(self, collisions):
        """
        Render one frame.

        Args:
            collisions: Total collision count
        """
        try:
            self._update_camera()
            self.screen.fill(self.colors['background'])
            self.draw_road()

            for car in self.state.cars:
                self.draw_car(car)

            self.draw_stats(collisions)
            pygame.display.flip()
        except Exception as e:
            print(f"Error in render: {e}")
            import traceback
            traceback.print_exc()
            raise

    def handle_events(self):
        """
        Handle pygame events: quit, and key presses for the player.

        Returns:
            True if should continue, False if should quit
        """
        for event in pygame.event.get():
            if not self.handle_event(event):
                return False
        return True

    def handle_event(self, event):
        """
        Apply a single pygame event.

        Key-up events never arrive once the window loses focus, so every
        latched action is released then.

        Returns:
            True if should continue, False if should quit
        """
        if event.type == pygame.QUIT:
            return False
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return False
            self.input_state.set_key(pygame.key.name(event.key), True)
        elif event.type == pygame.KEYUP:
            self.input_state.set_key(pygame.key.name(event.key), False)
        elif event.type == pygame.WINDOWFOCUSLOST:
            self.input_state.release_all()
        return True

    def tick(self, fps=60):
        """Tick the clock (limit FPS)."""
        self.clock.tick(fps)

    def quit(self):
        """Clean up pygame."""
        pygame.quit()
