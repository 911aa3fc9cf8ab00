# seabattle

A console sea battle game against the computer. You place your ships on a
grid, the computer places its own, and you take turns firing at each other.
Sinking an enemy ship earns you a random special ability.

## Installing

```
pip install .
```

## Playing

```
seabattle
seabattle --save-file mygame.json
```

`--save-file` sets where the game is saved to and loaded from; the default
is `save.json` in the working directory.

The game reads one command per line. The first letter of the word you type
selects the command; by default the keys are:

| Key | Command       | What it does                                          |
|-----|---------------|-------------------------------------------------------|
| `g` | `game_start`  | start a new game, or load the saved one               |
| `a` | `attack`      | fire at a cell of the enemy field; the computer replies |
| `u` | `use_ability` | use the next ability in your queue, then attack       |
| `s` | `save`        | save the game                                         |
| `l` | `load`        | load the saved game                                   |
| `e` | `end`         | leave the game                                        |

The keys can be changed with a `commands.json` file in the working
directory, a JSON object that maps a key to each of the six command names.
Only the first letter of each key is used:

```json
{
    "n": "game_start",
    "s": "save",
    "l": "load",
    "q": "end",
    "f": "attack",
    "u": "use_ability"
}
```

If the file is missing, is not a JSON object, does not have exactly six
entries, names an unknown command, or binds one command to two keys, an
error is printed and the default keys are used.

### Starting a game

`game_start` first asks whether to load the previous game. Otherwise it asks
for the field size (`columns rows`), the number of ships and the length of
each ship (1 to 4). You then place your ships one at a time by typing the
coordinates of their first cell, and the computer places its fleet at
random.

Coordinates are typed as two numbers on one line, `x y`, counting from 0.
Ships may not touch each other, not even at the corners. Invalid input is
reported and asked for again.

### Fields

Fields are drawn as coloured grids with ANSI escape codes:

- `0` an intact ship segment (shown only on your own field)
- `.` a damaged segment
- `x` a destroyed segment
- `-` a missed shot

A segment takes two hits to destroy. When all enemy ships are sunk a new
round begins with a freshly placed enemy fleet. When all your ships are sunk
you are asked whether to start a new game.

## Abilities

You start with three abilities, one of each kind, in random order. Each
enemy ship you sink adds a random one to the end of the queue.

- **Double Damage** – your next shot hits the segment twice.
- **Scanner** – asks for a cell and reports whether the 2×2 area starting
  there holds part of a ship.
- **Shelling** – hits a segment of a random enemy ship that is not yet
  destroyed.

## Using it as a library

```python
from seabattle.field import GameField
from seabattle.ship import Ship, Orientation

field = GameField(5, 5)
ship = Ship(3, Orientation.HORIZONTAL)
field.add_ship(0, 0, ship, 0)
field.hit(1, 0, False)      # returns the ship index, or None on a miss
print(field.render())
```

The main pieces:

- `seabattle.ship` – `Ship`, `ShipSegment`, `ShipManager`
- `seabattle.field` – `GameField` with placement, hits and plain text views
- `seabattle.abilities` – `AbilityManager` and the `DoubleHit`, `Scanner`
  and `Shelling` abilities
- `seabattle.state` – `GameState`, written to and read from JSON with
  `dumps` and `loads`
- `seabattle.storage` – `SaveFile`, which saves and loads a `GameState`
- `seabattle.output` – `Output` and `render_field` for the coloured view
- `seabattle.reader` – `InputReader` and the `Command` enum
- `seabattle.game` – `Game`, `GameController` and `main`

Errors such as `OutOfField`, `IntersectShip` or `InvalidLen` live in
`seabattle.errors`.

## What it does not do

- Your ships are always placed horizontally; there is no way to turn them.
- The computer does not aim: it fires at the first open cell from a random
  starting point.
- There is a single save slot. A save records how many abilities you hold,
  not which ones; on loading, the queue is filled with random abilities.

## Running the tests

```
pip install .[test]
pytest
```