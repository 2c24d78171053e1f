# flake8: noqa E501

import json
import logging
from gettext import gettext as _
from pathlib import Path

logger = logging.getLogger(__name__)

COMMAND_DESCRIPTION = _("Draw a comment list over an image")


def command(subparser):
    subparser.add_argument("image", type=Path, help=_("Image the comments refer to"))
    subparser.add_argument("comments", type=Path, help=_("JSON comment list"))
    subparser.add_argument("output", type=Path, help=_("Where to save the rendered image"))
    subparser.add_argument("--width", type=int, help=_("Render width in pixels"))
    subparser.add_argument("--height", type=int, help=_("Render height in pixels"))

    def handle(args):
        import cv2

        from image_comments.core.annotation import AnnotationSession, Frame
        from image_comments.interfaces import GUIAnnotationAdapter
        from image_comments.utils.config import load_config

        cfg = load_config()

        image = cv2.imread(str(args.image))
        assert image is not None, _("Could not read image {image}").format(image=args.image)
        image = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)

        height, width = image.shape[:2]
        if args.width or args.height:
            # Missing dimension keeps the natural aspect ratio
            new_width = args.width or round(width * args.height / height)
            new_height = args.height or round(height * args.width / width)
            image = cv2.resize(image, (new_width, new_height))
            logger.debug(f"Resized {width}x{height} to {new_width}x{new_height}")
            height, width = new_height, new_width

        session = AnnotationSession.from_config(cfg)
        session.load_comments(json.loads(args.comments.read_text()))
        adapter = GUIAnnotationAdapter.from_config(
            session, cfg, frame_provider=lambda: Frame(width=width, height=height)
        )

        vis = adapter.get_visualization(image)
        cv2.imwrite(str(args.output), cv2.cvtColor(vis, cv2.COLOR_RGB2BGR))
        logger.info(
            _("Rendered {count} comments to {output}").format(
                count=len(session.annotations), output=args.output
            )
        )

    return handle
