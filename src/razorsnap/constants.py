from pathlib import Path

RAZORSNAP_MANAGED_DIR_NAME = ".razorsnap"
RAZORSNAP_CONFIG_FILE_NAME = "config.yml"

RAZOR_CONFIGURATION_FILE_NAME = "project.razor.json"
"""The fixed name of the configuration document written to a project's intermediate output directory."""

RAZORSNAP_FILE_ENCODING = "utf-8"
"""The encoding used for the configuration document, configuration files and evaluation dumps."""

RAZORSNAP_LOG_FORMAT = "%(levelname)-5s %(asctime)-15s [%(threadName)s] %(name)s:%(funcName)s:%(lineno)d - %(message)s"

# MSBuild properties
INTERMEDIATE_OUTPUT_PATH_PROPERTY_NAME = "IntermediateOutputPath"
MSBUILD_PROJECT_DIRECTORY_PROPERTY_NAME = "MSBuildProjectDirectory"
MSBUILD_PROJECT_FULL_PATH_PROPERTY_NAME = "MSBuildProjectFullPath"
TARGET_FRAMEWORK_PROPERTY_NAME = "TargetFramework"
TARGET_FRAMEWORK_VERSION_PROPERTY_NAME = "TargetFrameworkVersion"
DEBUG_RAZOR_PLUGIN_PROPERTY_NAME = "_DebugRazorOmnisharpPlugin_"
RAZOR_DEFAULT_CONFIGURATION_PROPERTY_NAME = "RazorDefaultConfiguration"
RAZOR_LANG_VERSION_PROPERTY_NAME = "RazorLangVersion"

# MSBuild item types
PROJECT_CAPABILITY_ITEM_TYPE = "ProjectCapability"
RAZOR_CONFIGURATION_ITEM_TYPE = "RazorConfiguration"
RAZOR_EXTENSION_ITEM_TYPE = "RazorExtension"
REFERENCE_PATH_ITEM_TYPE = "ReferencePath"

# MSBuild item metadata
EXTENSIONS_METADATA_NAME = "Extensions"
VERSION_METADATA_NAME = "Version"
FUSION_NAME_METADATA_NAME = "FusionName"

# project capabilities
RAZOR_CORE_CAPABILITY = "DotNetCoreRazor"
RAZOR_CORE_CONFIGURATION_CAPABILITY = "DotNetCoreRazorConfiguration"

MVC_RAZOR_ASSEMBLY_FILE_NAME = "Microsoft.AspNetCore.Mvc.Razor.dll"


def default_razorsnap_home_dir() -> str:
    return str(Path.home() / RAZORSNAP_MANAGED_DIR_NAME)
