"""
The rule engine: legality of moves, check, checkmate and stalemate.

All functions are queries: the position passed in is never modified.
Whether a move leaves your own king in check is found out by playing it on a copy of the position.
"""

from typing import Iterator

from src.chess.moves import ATTACK_RULES, MOVEMENT_RULES, Move
from src.chess.pieces import Color
from src.chess.position import Position
from src.chess.square import Square, all_squares


def is_square_attacked(square: Square, by_color: Color, position: Position) -> bool:
    """
    Is any piece of `by_color` aiming at the square?
    ----

    Pure attack geometry: does not care whether actually moving there would be legal
    (this is what check detection is built on, so it must not depend on check detection itself).
    """
    board = position.board
    for attacker_square in board.locate_color(by_color):
        if attacker_square == square:
            continue
        attack_rule = ATTACK_RULES[board.piece(attacker_square).type]
        if attack_rule(attacker_square, square, board):
            return True
    return False


def is_in_check(color: Color, position: Position) -> bool:
    king_square = position.board.locate_king(color)
    if king_square is None:
        return False
    return is_square_attacked(king_square, color.opponent, position)


def is_legal_move(from_square: Square, to_square: Square, position: Position) -> bool:
    """
    Combines the following
    ----

    1. both squares on the board and not the same square
    2. there is a piece to move, and it does not land on a piece of its own color
    3. the movement pattern of the piece allows it
    4. the move does not put (or leave) your own king in check
    """
    if not (from_square.is_within_bounds() and to_square.is_within_bounds()):
        return False
    if from_square == to_square:
        return False

    piece = position.get(from_square)
    if piece.is_empty:
        return False
    if position.is_occupied_by_color(to_square, piece.color):
        return False

    movement_rule = MOVEMENT_RULES[piece.type]
    if not movement_rule(from_square, to_square, position.board):
        return False

    return not _is_putting_yourself_in_check(from_square, to_square, position)


def _is_putting_yourself_in_check(
    from_square: Square, to_square: Square, position: Position
) -> bool:
    """Return True if the move puts you in check

    plan:
    1. Copy the position
    2. make the candidate move
    3. determine if king is in check on the new board
    """
    color = position.get(from_square).color
    scratch = position.copy()
    scratch.board.move_piece(from_square, to_square)
    return is_in_check(color, scratch)


def enumerate_legal_moves(from_square: Square, position: Position) -> set[Square]:
    """All squares the piece on `from_square` may legally move to (used for move hints)"""
    if not from_square.is_within_bounds():
        return set()
    return {
        to_square
        for to_square in all_squares()
        if to_square != from_square
        and is_legal_move(from_square, to_square, position)
    }


def generate_legal_moves(color: Color, position: Position) -> Iterator[Move]:
    """Every legal move of the player with the 'color' pieces, produced one at a time"""
    for from_square in position.board.locate_color(color):
        for to_square in all_squares():
            if is_legal_move(from_square, to_square, position):
                yield Move(from_square, to_square)


def has_any_legal_move(color: Color, position: Position) -> bool:
    """Stops looking as soon as a single legal move turns up"""
    return next(generate_legal_moves(color, position), None) is not None


def is_checkmate(color: Color, position: Position) -> bool:
    return is_in_check(color, position) and not has_any_legal_move(color, position)


def is_stalemate(color: Color, position: Position) -> bool:
    return not is_in_check(color, position) and not has_any_legal_move(color, position)
