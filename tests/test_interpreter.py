import os
import tempfile
import unittest

from game import (
    Board,
    CommandInterpreter,
    Game,
    Outcome,
    Phase,
    STACKS,
    deal,
    make_card,
    save_game,
)
from saa_core.interpreter import BAD_INPUT
from saa_core.keys import EOF

from display_fakes import FakeDisplay

C3 = make_card(3, 0)
S4 = make_card(4, 3)
D5 = make_card(5, 1)


def make_game(stacks, path, foundations=(0, 1, 2, 3)):
    stacks = list(stacks) + [()] * (STACKS - len(stacks))
    board = Board(5)
    board.load(5, foundations, stacks)
    return Game(board=board, save_path=path)


def copy_board(board):
    other = Board(board.rank_count)
    other.load(board.rank_count, board.foundations(), board.stacks())
    return other


class TestCommandInterpreter(unittest.TestCase):
    def setUp(self):
        self._td = tempfile.TemporaryDirectory()
        self.path = os.path.join(self._td.name, 'saa.sav')

    def tearDown(self):
        self._td.cleanup()

    def _mk(self, stacks, keys=(), foundations=(0, 1, 2, 3)):
        game = make_game(stacks, self.path, foundations)
        display = FakeDisplay(keys)
        return game, display, CommandInterpreter(game, display)

    def test_given_source_digit_when_stack_has_cards_then_awaits_destination(self):
        game, display, interp = self._mk([(C3, 4)])
        self.assertEqual(interp.handle_key('1'), Outcome.CONTINUE)
        self.assertIs(interp.phase, Phase.AWAITING_DESTINATION)
        self.assertEqual(interp.source, 0)
        interp.prompt()
        self.assertEqual(display.prompt, 'Move CA from stack 1 to ')

    def test_given_empty_source_when_selected_then_reported_and_phase_kept(self):
        game, display, interp = self._mk([(C3,)])
        interp.handle_key('3')
        self.assertIs(interp.phase, Phase.AWAITING_SOURCE)
        self.assertEqual(display.status, 'There is no card in stack 3.')

    def test_given_bad_source_key_when_handled_then_invalid_command_reported(self):
        for key in ('x', '0', '9', 'ab'):
            game, display, interp = self._mk([(C3,)])
            self.assertEqual(interp.handle_key(key), Outcome.CONTINUE)
            self.assertEqual(display.status, BAD_INPUT)
            self.assertIs(interp.phase, Phase.AWAITING_SOURCE)

    def test_given_source_then_zero_when_legal_then_card_moves_to_foundation(self):
        game, display, interp = self._mk([(C3, 4), (S4, D5)])
        interp.handle_key('1')
        self.assertEqual(interp.handle_key('0'), Outcome.CONTINUE)
        self.assertEqual(game.board.foundation_ref(0), 4)
        self.assertEqual(display.foundations[0], 4)
        self.assertEqual(display.stacks[0], (C3,))
        self.assertEqual(display.status, 'The CA was moved to the foundation.')
        self.assertIs(interp.phase, Phase.AWAITING_SOURCE)
        self.assertIsNone(interp.source)

    def test_given_illegal_stack_move_when_handled_then_board_unchanged_and_reported(self):
        game, display, interp = self._mk([(C3,), (D5,), (S4, 4)])
        before = copy_board(game.board)
        interp.handle_key('1')
        interp.handle_key('2')
        self.assertEqual(game.board, before)
        self.assertEqual(display.status, 'The C3 cannot be moved from stack 1 to stack 2.')
        self.assertIs(interp.phase, Phase.AWAITING_SOURCE)
        self.assertEqual(display.stacks, {})

    def test_given_bad_destination_key_when_handled_then_still_awaiting_destination(self):
        game, display, interp = self._mk([(C3,)])
        interp.handle_key('1')
        interp.handle_key('x')
        self.assertEqual(display.status, BAD_INPUT)
        self.assertIs(interp.phase, Phase.AWAITING_DESTINATION)
        self.assertEqual(interp.source, 0)

    def test_given_destination_phase_without_source_when_handled_then_runtime_error(self):
        game, display, interp = self._mk([(C3,)])
        interp.phase = Phase.AWAITING_DESTINATION
        with self.assertRaises(RuntimeError):
            interp.handle_key('2')

    def test_given_quit_or_eof_when_handled_then_quit_in_either_phase(self):
        game, display, interp = self._mk([(C3,)])
        self.assertEqual(interp.handle_key('q'), Outcome.QUIT)
        self.assertEqual(interp.handle_key(EOF), Outcome.QUIT)
        interp.handle_key('1')
        self.assertEqual(interp.handle_key('q'), Outcome.QUIT)

    def test_given_aliased_keys_when_running_then_move_wins_game(self):
        # Moving C3 off the ace leaves every stack ordered
        game, display, interp = self._mk([(4, C3)], keys=['j', 'k'])
        self.assertEqual(interp.run(), Outcome.WON)
        self.assertEqual(game.board.stack_cards(1), (C3,))
        self.assertEqual(display.status, 'Moved the C3 from stack 1 to stack 2.')

    def test_given_space_alias_when_running_then_selects_foundation(self):
        game, display, interp = self._mk([(C3, 4), (S4, D5)], keys=['j', ' ', 'q'])
        self.assertEqual(interp.run(), Outcome.QUIT)
        self.assertEqual(game.board.foundation_ref(0), 4)

    def test_given_ordered_board_when_running_then_won_without_reading(self):
        game, display, interp = self._mk([(C3, 4)], keys=['q'])
        self.assertEqual(interp.run(), Outcome.WON)
        self.assertEqual(display.keys, ['q'])

    def test_given_end_of_input_when_running_then_quit(self):
        game, display, interp = self._mk([(4, C3)])
        self.assertEqual(interp.run(), Outcome.QUIT)

    def test_given_confirmed_save_then_restore_when_handled_then_board_back(self):
        game, display, interp = self._mk([])
        deal(game.board, seed=6)
        saved = copy_board(game.board)
        display.keys = [' ']
        self.assertEqual(interp.handle_key('s'), Outcome.CONTINUE)
        self.assertEqual(display.status, 'Game saved.')
        self.assertTrue(os.path.exists(self.path))

        deal(game.board, 8, seed=7)
        display.keys = [' ']
        self.assertEqual(interp.handle_key('r'), Outcome.CONTINUE)
        self.assertEqual(game.board, saved)
        self.assertEqual(display.status, f'Game restored from {self.path}.')
        self.assertEqual(len(display.stacks), STACKS)

    def test_given_declined_confirmation_when_saving_then_nothing_written(self):
        game, display, interp = self._mk([(C3,)], keys=['n'])
        interp.handle_key('s')
        self.assertEqual(display.status, 'The saving of the game was aborted.')
        self.assertFalse(os.path.exists(self.path))
        display.keys = ['n']
        interp.handle_key('r')
        self.assertEqual(display.status, 'The restoration of the old game was aborted.')

    def test_given_corrupt_save_when_restoring_then_board_kept_and_redeal_offered(self):
        with open(self.path, 'wb') as f:
            f.write(b'\x00\x01\x02\x03junk')
        game, display, interp = self._mk([(C3,)], keys=[' ', ' '])
        before = copy_board(game.board)
        self.assertEqual(interp.handle_key('r'), Outcome.REDEAL)
        self.assertEqual(game.board, before)
        self.assertEqual(display.status, 'Restore error: Bad save file format.')

        display.keys = [' ', 'n']
        self.assertEqual(interp.handle_key('r'), Outcome.CONTINUE)
        self.assertEqual(game.board, before)

    def test_given_missing_save_when_restoring_then_reported(self):
        game, display, interp = self._mk([(C3,)], keys=[' '])
        self.assertEqual(interp.handle_key('r'), Outcome.CONTINUE)
        self.assertTrue(display.status.startswith('Restore error: Cannot open'))
        self.assertTrue(display.status.endswith('Game not restored.'))

    def test_given_unwritable_save_path_when_saving_then_reported(self):
        game, display, interp = self._mk([(C3,)], keys=[' '])
        game.save_path = os.path.join(self._td.name, 'missing', 'saa.sav')
        interp.handle_key('s')
        self.assertTrue(display.status.startswith('Save error: Cannot open'))

    def test_given_help_when_awaiting_destination_then_help_shown_and_source_dropped(self):
        game, display, interp = self._mk([(C3,)])
        interp.handle_key('1')
        self.assertEqual(interp.handle_key('?'), Outcome.CONTINUE)
        self.assertEqual(display.help_shown, 1)
        self.assertIs(interp.phase, Phase.AWAITING_SOURCE)
        self.assertEqual(len(display.stacks), STACKS)
        self.assertEqual(display.status, 'Fresh display.  Type ? for help.')

    def test_given_saved_game_when_restoring_ordered_board_then_won(self):
        board = Board(5)
        board.load(5, (make_card(5, 0), make_card(5, 1), make_card(5, 2), make_card(5, 3)), [()] * STACKS)
        save_game(board, self.path)
        game, display, interp = self._mk([(4, C3)], keys=[' '])
        self.assertEqual(interp.handle_key('r'), Outcome.WON)


if __name__ == '__main__':
    unittest.main(verbosity=2)
