"""
Figure layout helpers.

tight_layout shrinks the whitespace around every axes of a figure: each axes
is placed inside its outer box (its subplot cell), inset by the room its
labels need plus a fixed padding.
"""
from typing import Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib.transforms import Bbox

# Padding added to each side of an axes' tight inset (figure fraction)
LAYOUT_PAD = 0.05

# Canvas that fsize fractions refer to (inches)
BASE_FIGSIZE = (16.0, 9.0)


def _outer_position(ax: plt.Axes) -> Bbox:
    """
    Box the axes may occupy in figure fraction.

    For subplots this is its grid cell over the whole figure (subplot
    margins ignored); free-standing axes keep their current position.
    """
    spec = ax.get_subplotspec()
    if spec is None:
        return ax.get_position()

    nrows, ncols = spec.get_gridspec().get_geometry()
    rows, cols = spec.rowspan, spec.colspan
    x0 = cols.start / ncols
    x1 = cols.stop / ncols
    y0 = 1.0 - rows.stop / nrows
    y1 = 1.0 - rows.start / nrows
    return Bbox.from_extents(x0, y0, x1, y1)


def _tight_inset(ax: plt.Axes, fig: plt.Figure, renderer) -> Tuple[float, float, float, float]:
    """Room (left, bottom, right, top) the decorations of ax take around it."""
    pos = ax.get_position()
    tight = ax.get_tightbbox(renderer).transformed(fig.transFigure.inverted())
    return (
        max(pos.x0 - tight.x0, 0.0),
        max(pos.y0 - tight.y0, 0.0),
        max(tight.x1 - pos.x1, 0.0),
        max(tight.y1 - pos.y1, 0.0),
    )


def _set_font(ax: plt.Axes, font: float) -> None:
    ax.tick_params(labelsize=font)
    ax.xaxis.label.set_fontsize(font)
    ax.yaxis.label.set_fontsize(font)
    ax.title.set_fontsize(font)


def tight_layout(
    fig: plt.Figure,
    fsize: Optional[Tuple[float, float]] = None,
    font: Optional[float] = None,
    pad: float = LAYOUT_PAD,
) -> plt.Figure:
    """
    Tighten the layout of a figure.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
        Figure with zero or more axes
    fsize : (float, float), optional
        Figure size as (width, height) fractions of BASE_FIGSIZE
    font : float, optional
        Font size applied to every axes (only used together with fsize)
    pad : float
        Padding added on each side of each axes' tight inset

    Returns
    -------
    matplotlib.figure.Figure
        The same figure, with its axes repositioned
    """
    if fsize is not None:
        fig.set_size_inches(BASE_FIGSIZE[0] * fsize[0], BASE_FIGSIZE[1] * fsize[1])

    renderer = fig.canvas.get_renderer()
    for ax in list(fig.axes):
        if fsize is not None and font is not None:
            _set_font(ax, font)

        outer = _outer_position(ax)
        left_in, bottom_in, right_in, top_in = (v + pad for v in _tight_inset(ax, fig, renderer))

        ax.set_position([
            outer.x0 + left_in,
            outer.y0 + bottom_in,
            outer.width - left_in - right_in,
            outer.height - bottom_in - top_in,
        ])

    return fig
