import logging
import sys
from argparse import ArgumentParser
from dataclasses import dataclass
from pathlib import Path

import imageio.v2 as imageio
import PIL.Image

from mandelzoom import (
    CatmullRomGradient,
    GradientAnchor,
    RenderParameters,
    ZoomPlanner,
    gradient_from_colormap,
    render_frame,
    to_image,
)
from mandelzoom.colors import to_rgb

logger = logging.getLogger("zoom")

DEFAULT_ANCHORS = (
    (0.0, (0, 8, 106)),
    (0.25, (55, 139, 218)),
    (0.5, (246, 251, 225)),
    (0.75, (253, 160, 0)),
    (1.0, (0, 8, 106)),
)


@dataclass
class OutputConfig:
    mode: str
    frame_dir: Path | None
    image_path: Path | None
    gif_path: Path | None
    image_format: str


def build_parser():
    parser = ArgumentParser(description='Render a Mandelbrot zoom as a sequence of anti-aliased frames.')

    parser.add_argument('--max-iterations', type=int,
                        dest='max_iterations', help='maximum number of iterations before a point is considered inside the set',
                        metavar='MAX_ITERATIONS', default=50000)

    parser.add_argument('--x-res', type=int,
                        dest='x_res', help='image width in pixels',
                        metavar='X_RES', default=800)

    parser.add_argument('--y-res', type=int,
                        dest='y_res', help='image height in pixels',
                        metavar='Y_RES', default=600)

    parser.add_argument('--x-center', type=float,
                        dest='x_center', help='x coordinate in the complex plane to zoom towards',
                        metavar='X_CENTER', default=-0.743643887037158704752191506114774)

    parser.add_argument('--y-center', type=float,
                        dest='y_center', help='y coordinate in the complex plane to zoom towards',
                        metavar='Y_CENTER', default=0.131825904205311970493132056385139)

    parser.add_argument('--plane-width', type=float,
                        dest='plane_width', help='width of the complex plane shown by the first frame',
                        metavar='PLANE_WIDTH', default=4.0)

    parser.add_argument('--magnification', type=float, default=None,
                        help='magnification of the first frame (1 shows a plane width of 4). Overrides --plane-width.')

    parser.add_argument('--bailout', type=float, default=10.0,
                        help='squared orbit magnitude beyond which a point has escaped')

    parser.add_argument('--aa-factor', type=int,
                        dest='aa_factor', help='sub-samples per pixel along each axis',
                        metavar='AA_FACTOR', default=3)

    parser.add_argument('--multiplier', type=float, default=5000.0,
                        help='how fast the smoothed escape count travels through the gradient')

    parser.add_argument('--show-discovery', dest='show_discovery', action='store_true',
                        help='color interior points by the rule that detected them')

    parser.add_argument('--colormap', type=str, default=None,
                        help='matplotlib colormap to sample the gradient from instead of the built-in one')

    parser.add_argument('--colormap-anchors', type=int, dest='colormap_anchors', default=16,
                        help='number of anchors sampled from --colormap')

    parser.add_argument('--max-square-size', type=int, dest='max_square_size', default=16,
                        help='largest square of the coarse-to-fine pixel ordering (power of two)')

    parser.add_argument('--zoom-factor', type=float,
                        dest='zoom_factor', help='factor applied to the plane width each frame. Choose < 1 to zoom in, > 1 to zoom out',
                        metavar='ZOOM_FACTOR', default=0.95)

    parser.add_argument('--final-zoom', type=float, default=None,
                        help='overall scale reached by the last frame. If set, overrides --zoom-factor.')

    parser.add_argument('--easing', type=str, default='ease',
                        help='temporal curve used with --final-zoom: "linear" or "ease".')

    parser.add_argument('--frames', type=int,
                        dest='frames', help='number of frames to generate',
                        metavar='FRAMES', default=1000)

    parser.add_argument('--mode', choices=['frames', 'image'], default='frames',
                        help='"frames" writes a resumable numbered sequence, "image" writes only the last frame.')

    parser.add_argument('--frame-dir', dest='frame_dir', type=str, default='./frames',
                        help='directory in which to store the frame sequence')

    parser.add_argument('--output', dest='output', type=str, default=None,
                        help='file written by the image mode')

    parser.add_argument('--gif', dest='gif', type=str, default=None,
                        help='also assemble the frame sequence into this GIF file')

    parser.add_argument('--format', type=str,
                        dest='format', help='file format for images. Any extension supported by Pillow. Default: "png".',
                        metavar='FORMAT', default='png')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='enable debug logging')

    return parser


def resolve_output_config(opt, parser: ArgumentParser) -> OutputConfig:
    image_format = (opt.format or 'png').lower().lstrip('.') or 'png'

    if opt.mode == 'image':
        if opt.gif:
            parser.error('--gif is only valid with the frames mode.')
        output_path = Path(opt.output or f'frame_final.{image_format}').expanduser()
        if output_path.suffix:
            if output_path.suffix.lower() != f'.{image_format}':
                parser.error(f'--output extension {output_path.suffix} does not match --format {image_format}.')
        else:
            output_path = output_path.with_suffix(f'.{image_format}')
        return OutputConfig('image', None, output_path.resolve(), None, image_format)

    if opt.output:
        parser.error('--output is only valid with the image mode.')
    gif_path = None
    if opt.gif:
        gif_path = Path(opt.gif).expanduser()
        if gif_path.suffix.lower() != '.gif':
            parser.error('GIF outputs must end with .gif.')
        gif_path = gif_path.resolve()
    frame_dir = Path(opt.frame_dir).expanduser().resolve()
    return OutputConfig('frames', frame_dir, None, gif_path, image_format)


def build_gradient(opt):
    if opt.colormap:
        return gradient_from_colormap(opt.colormap, anchors=opt.colormap_anchors)
    return CatmullRomGradient(GradientAnchor(index, to_rgb(*rgb)) for index, rgb in DEFAULT_ANCHORS)


def build_parameters(opt) -> RenderParameters:
    plane_width = opt.plane_width
    if opt.magnification is not None:
        if opt.magnification <= 0:
            raise ValueError('magnification must be positive.')
        plane_width = 4.0 / opt.magnification
    params = RenderParameters(
        x_res=opt.x_res,
        y_res=opt.y_res,
        x_center=opt.x_center,
        y_center=opt.y_center,
        plane_width=plane_width,
        max_iterations=opt.max_iterations,
        bailout=opt.bailout,
        aa_factor=opt.aa_factor,
        multiplier=opt.multiplier,
        show_discovery=bool(opt.show_discovery),
        max_square_size=opt.max_square_size,
    )
    params.validate()
    return params


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def frame_path(frame_dir: Path, index: int, image_format: str) -> Path:
    return frame_dir / f"frame_{index:04d}.{image_format}"


def write_image(image: PIL.Image.Image, output_path: Path, image_format: str) -> None:
    pil_format = _pil_format_name(image_format)
    if pil_format == "JPEG":
        image = image.convert("RGB")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(str(output_path), format=pil_format)


def _log_progress(done: int, total: int) -> None:
    logger.debug("%d of %d pixels", done, total)


def render_sequence(frames, config: OutputConfig, gradient) -> list[Path]:
    """Render each frame into the frame directory, skipping frames already on disk."""

    written = []
    total = len(frames)
    for number, params in enumerate(frames, start=1):
        path = frame_path(config.frame_dir, number, config.image_format)
        written.append(path)
        if path.exists():
            print(f"Skipping frame {number} (already exists)")
            continue
        print("frame {0} out of {1} (width = {2:.10f})".format(number, total, params.plane_width), end='\r')
        result = render_frame(params, gradient, progress=_log_progress)
        write_image(to_image(result.pixels), path, config.image_format)
    print()
    return written


def write_gif(gif_path: Path, frame_paths) -> None:
    gif_path.parent.mkdir(parents=True, exist_ok=True)
    writer = imageio.get_writer(str(gif_path), mode='I', duration=0.1, loop=0)
    try:
        for path in frame_paths:
            writer.append_data(imageio.imread(str(path)))
    finally:
        writer.close()


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if opt.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = resolve_output_config(opt, parser)

    try:
        params = build_parameters(opt)
        gradient = build_gradient(opt)
    except (KeyError, ValueError) as exc:
        parser.error(str(exc))

    planner = ZoomPlanner(
        frames=opt.frames,
        zoom_factor=opt.zoom_factor,
        final_zoom=opt.final_zoom,
        easing=opt.easing,
    )
    frames = planner.frame_parameters(params)
    if not frames:
        parser.error('--frames must be at least 1.')

    if config.mode == 'image':
        result = render_frame(frames[-1], gradient, progress=_log_progress)
        write_image(to_image(result.pixels), config.image_path, config.image_format)
        print(f"Wrote {config.image_path}")
        return 0

    config.frame_dir.mkdir(parents=True, exist_ok=True)
    written = render_sequence(frames, config, gradient)
    if config.gif_path is not None:
        write_gif(config.gif_path, written)
        print(f"Wrote {config.gif_path}")
    print("Done!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
