"""
Static detection data: known package names and filesystem locations.

These are configuration, not algorithm. Every list here can be replaced
from config.yaml and extended per call.
"""

BINARY_SU = "su"
BINARY_BUSYBOX = "busybox"
BINARY_MAGISK = "magisk"

KNOWN_ROOT_APPS_PACKAGES = (
    "com.noshufou.android.su",
    "com.noshufou.android.su.elite",
    "eu.chainfire.supersu",
    "com.koushikdutta.superuser",
    "com.thirdparty.superuser",
    "com.yellowes.su",
    "com.topjohnwu.magisk",
    "com.kingroot.kinguser",
    "com.kingo.root",
    "com.smedialink.oneclickroot",
    "com.zhiqupk.root.global",
    "com.alephzain.framaroot",
)

KNOWN_DANGEROUS_APPS_PACKAGES = (
    "com.koushikdutta.rommanager",
    "com.koushikdutta.rommanager.license",
    "com.dimonvideo.luckypatcher",
    "com.chelpus.lackypatch",
    "com.ramdroid.appquarantine",
    "com.ramdroid.appquarantinepro",
    "com.android.vending.billing.InAppBillingService.COIN",
    "com.android.vending.billing.InAppBillingService.LUCK",
    "com.chelpus.luckypatcher",
    "com.blackmartalpha",
    "org.blackmart.market",
    "com.allinone.free",
    "com.repodroid.app",
    "org.creeplays.hack",
    "com.baseappfull.fwd",
    "com.zmapp",
    "com.dv.marketmod.installer",
    "org.mobilism.android",
    "com.android.wp.net.log",
    "com.android.camera.update",
    "cc.madkite.freedom",
    "com.solohsu.android.edxp.manager",
    "org.meowcat.edxposed.manager",
    "com.xmodgame",
    "com.cih.game_cih",
    "com.charles.lpoqasert",
    "catch_.me_.if_.you_.can_",
)

KNOWN_ROOT_CLOAKING_PACKAGES = (
    "com.devadvance.rootcloak",
    "com.devadvance.rootcloakplus",
    "de.robv.android.xposed.installer",
    "com.saurik.substrate",
    "com.zachspong.temprootremovejb",
    "com.amphoras.hidemyroot",
    "com.amphoras.hidemyrootadfree",
    "com.formyhm.hiderootPremium",
    "com.formyhm.hideroot",
)

# Probed in this order; every entry ends with a separator
SU_PATHS = (
    "/data/local/",
    "/data/local/bin/",
    "/data/local/xbin/",
    "/sbin/",
    "/su/bin/",
    "/system/bin/",
    "/system/bin/.ext/",
    "/system/bin/failsafe/",
    "/system/sd/xbin/",
    "/system/usr/we-need-root/",
    "/system/xbin/",
    "/cache/",
    "/data/",
    "/dev/",
)

PATHS_THAT_SHOULD_NOT_BE_WRITABLE = (
    "/system",
    "/system/bin",
    "/system/sbin",
    "/system/xbin",
    "/vendor/bin",
    "/sbin",
    "/etc",
)

DANGEROUS_PROPS = {
    "ro.debuggable": "1",
    "ro.secure": "0",
}

# Android 6.0 (Marshmallow). Hosts at or below it print legacy mount lines.
LEGACY_MOUNT_SDK_THRESHOLD = 23

PROPERTIES_COMMAND = ("getprop",)
MOUNT_COMMAND = ("mount",)
LOCATE_SU_COMMAND = ("which", BINARY_SU)

TEST_KEYS_MARKER = "test-keys"
