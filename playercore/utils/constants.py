"""
Constantes globales pour playercore.

Ce module contient les constantes partagees par le parseur d'options,
l'orchestrateur et les adaptateurs:
- Nom du programme et bannieres
- Cles du magasin de configuration
- Codes de sortie du processus
- Canal reseau commun et position de fin de playlist
"""

import errno

# Nom utilise quand argv est vide
PROGRAM_NAME = "playercore"

COPYRIGHT_MESSAGE = "playercore - lecteur multimedia (c) les auteurs de playercore"

WARRANTY_MESSAGE = (
    "This program comes with NO WARRANTY, to the extent permitted by law.\n"
    "You may redistribute it under the terms of the GNU General Public License;\n"
    "see the file named COPYING for details."
)

# Prefixe des variables d'environnement (Settings et magasin de configuration)
ENV_PREFIX = "PLAYER_"

# ============================================================================
# Cles du magasin de configuration
# ============================================================================

# Interface
INTF_METHOD = "intf"

# Audio
AOUT_METHOD = "aout"
AOUT_STEREO = "aout_stereo"
AOUT_SPDIF = "aout_spdif"

# Video
VOUT_METHOD = "vout"
VOUT_DISPLAY = "display"
VOUT_WIDTH = "width"
VOUT_HEIGHT = "height"
VOUT_GRAYSCALE = "grayscale"
VOUT_FULLSCREEN = "fullscreen"
VOUT_OVERLAY = "overlay"
MOTION_METHOD = "motion"
IDCT_METHOD = "idct"
YUV_METHOD = "yuv"
VPAR_SYNCHRO = "synchro"

# DVD
INPUT_TITLE = "dvd_title"
INPUT_CHAPTER = "dvd_chapter"
INPUT_ANGLE = "dvd_angle"
INPUT_AUDIO = "dvd_audio"
INPUT_CHANNEL = "dvd_channel"
INPUT_SUBTITLE = "dvd_subtitle"

# Entree reseau
INPUT_METHOD = "input"
INPUT_SERVER = "server"
INPUT_PORT = "port"
INPUT_BROADCAST = "broadcast"
INPUT_CHANNEL_SERVER = "channel_server"
INPUT_CHANNEL_PORT = "channel_port"

# ============================================================================
# Codes de sortie
# ============================================================================

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_BAD_OPTION = errno.EINVAL

# Canal rejoint a la fin d'une session (canal 0 = reseau commun)
COMMON_CHANNEL = 0

# Position d'insertion "en fin de playlist"
PLAYLIST_END = -1
