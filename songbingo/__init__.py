"""SongBingo: bingo cards built from a song catalog."""
