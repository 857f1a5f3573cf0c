# sentpres

A plain text presentation tool. Every paragraph of a text file becomes one
slide. Each slide is drawn centred, in the largest font size that lets it fit
into three quarters of the window's width and height, so each slide gets one
idea across.

## Installing

    pip install .

To run the tests:

    pip install .[test]
    pytest

## Running

    sentpres slides.txt

If no file is given, or the file is `-`, slides are read from standard input.
A presentation read from standard input cannot be reloaded.

    sentpres -v

prints `sentpres-1` to standard error and exits. Any other option prints
`usage: sentpres [file]` and exits with status 1. A `--` argument ends the
options.

The window opens at the size of the screen and can be resized.

## Writing slides

- Slides are separated by one or more empty lines.
- A line starting with `#` is a comment and is skipped.
- A slide whose first line starts with `@` is an image slide: the rest of the
  line names an image file, which is drawn centred and scaled to fit the
  usable part of the window, keeping its aspect ratio.
- A line starting with `\` loses that backslash. This lets a slide start
  with a literal `@` or `#`, or hold a line that would otherwise be empty.

A file with no slides at all is an error.

Example:

    sentpres

    one idea per slide

    @nyan.png

    # this line is a comment
    \@ a line beginning with an at sign

## Images

Images are read in the farbfeld format. A file is passed through a filter
command, run with `sh -c`, chosen by its name:

| Pattern          | Command   |
|------------------|-----------|
| `\.ff$`          | `cat`     |
| `\.ff.bz2$`      | `bunzip2` |
| `\.[a-z0-9]+$`   | `2ff`     |

The first matching pattern wins (case is ignored). The command gets the file
on standard input and must write farbfeld to standard output; these commands
must be installed for image slides to work. Transparent parts of an image are
blended with the background colour. All images are loaded when the
presentation starts and again on reload.

## Keys

| Key                                                     | Action         |
|---------------------------------------------------------|----------------|
| Right, Return, Space, l, j, Down, Page Down, n          | next slide     |
| Left, Backspace, h, k, Up, Page Up, p                   | previous slide |
| r                                                       | reload file    |
| Escape, q                                               | quit           |

Mouse: left click or wheel down goes forward; right click or wheel up goes
back.

From the second slide on, a progress bar five pixels high along the bottom
edge of text slides shows how far into the presentation you are.

## Fonts and colours

Text is black on white. Fonts are looked up by name among the system fonts,
trying `dejavu sans`, `roboto` and `ubuntu`; each character is drawn with the
first of them that has it, and pygame's built-in font is used if none is
found. These environment variables change the defaults:

| Variable               | Meaning                                             |
|------------------------|-----------------------------------------------------|
| `SENTPRES_FONT`        | comma separated font names, at most ten, tried first |
| `SENTPRES_FOREGROUND`  | text colour, a colour name or `#rgb`-style hex      |
| `SENTPRES_BACKGROUND`  | background colour, likewise                         |

## Using it as a library

- `sentpres.slides`: `parse_slides(lines)` and `load(stream)` return a list of
  `Slide` objects (`lines`, and `embed` for the image file name);
  `NoSlidesError` is raised for empty input.
- `sentpres.farbfeld`: `decode(stream, background)` reads farbfeld data into an
  RGB `Image`; `scale(image, width, height)` resamples it bilinearly;
  `fit_size(...)` computes the aspect-preserving size; `find_filter`,
  `open_filtered` and `load_image` run the filter commands. Errors raise
  `FarbfeldError`.
- `sentpres.presenter`: `Presentation` (with `current`, `advance(step)`,
  `reload()` and `progress_width(width)`), `Geometry`, and `fit_font`, which
  picks the largest font set a slide fits into.
- `sentpres.drw`: `FontSet`, `Canvas`, `fit_text` and `parse_color`.
- `sentpres.app`: `Viewer`, `parse_args` and `main`.

## What it does not do

Settings are not read from X resources; fonts and colours are changed only
through the environment variables above. Colour depth and other display
properties are left to pygame.