"""CLI, logging, file, subprocess and record helpers shared by the ferris-lab programs."""
